import enum


class Role(str, enum.Enum):
    INFRA_ANALYST = "INFRA_ANALYST"
    DBA = "DBA"
    TECH_RELATIONSHIP = "TECH_RELATIONSHIP"
    PROJECT_ANALYST = "PROJECT_ANALYST"
    SUPERVISOR = "SUPERVISOR"
    MONITORING_ANALYST = "MONITORING_ANALYST"
    INTERN = "INTERN"
    INFRA_ASSISTANT = "INFRA_ASSISTANT"
    MONITORING_ASSISTANT = "MONITORING_ASSISTANT"
    DB_ASSISTANT = "DB_ASSISTANT"


class Squad(str, enum.Enum):
    LAKERS = "LAKERS"
    BULLS = "BULLS"
    WARRIORS = "WARRIORS"
    ROCKETS = "ROCKETS"

"""
SmartWiFi Portal - Schemas
"""
from smartwifi.schemas.response import (
    ErrorCodes,
    error_response,
    Document,
    InsertedResponse,
    OkResponse,
    IdRequest,
)
from smartwifi.schemas.auth import (
    LoginRequest,
    LoginResponse,
    SessionClaims,
    MeResponse,
)
from smartwifi.schemas.cafe import (
    AddCafeRequest,
    ToggleCafeRequest,
    CafeDoc,
    InstallCafeResponse,
)
from smartwifi.schemas.plan import (
    PlanDuration,
    AddPlanRequest,
    PlanDoc,
)
from smartwifi.schemas.card import (
    GenerateCardsRequest,
    SearchCardsRequest,
    CardDoc,
    GenerateCardsResponse,
)
from smartwifi.schemas.design import (
    AddDesignRequest,
    DesignDoc,
)

# dbcheck/routers/compat.py
from typing import Dict, List

from fastapi import APIRouter, Depends

from dbcheck.db.store import DiagnosticStore
from dbcheck.routers.deps import get_diagnostic_engine, get_store
from dbcheck.schemas.diagnostic import (
    EmployeeOut,
    HashMethodResponse,
    ProfileCheckResponse,
    SampleDataResponse,
)
from dbcheck.services.compatibility.compatibility_service import (
    check_database_setup,
    detect_password_hash_method,
    get_available_employees,
    get_existing_service_names,
    get_sample_data,
    verify_user_profile,
)
from dbcheck.services.diagnostic.diagnostic_service import DiagnosticEngine

router = APIRouter(prefix="/compat", tags=["compat"])

@router.get("/setup", response_model=Dict[str, bool])
def database_setup(store: DiagnosticStore = Depends(get_store)) -> Dict[str, bool]:
    return check_database_setup(store)

@router.get("/sample-data", response_model=SampleDataResponse)
def sample_data(store: DiagnosticStore = Depends(get_store)) -> SampleDataResponse:
    return SampleDataResponse(**get_sample_data(store))

@router.get("/service-names", response_model=List[str])
def service_names(store: DiagnosticStore = Depends(get_store)) -> List[str]:
    return get_existing_service_names(store)

@router.get("/available-employees", response_model=List[EmployeeOut])
def available_employees(store: DiagnosticStore = Depends(get_store)) -> List[EmployeeOut]:
    return [EmployeeOut(id=e.id, name=e.name, department=e.department) for e in get_available_employees(store)]

@router.get("/password-hash-method/{email}", response_model=HashMethodResponse)
def password_hash_method(email: str, store: DiagnosticStore = Depends(get_store)) -> HashMethodResponse:
    return HashMethodResponse(email=email, method=detect_password_hash_method(store, email))

@router.get("/verify-profile/{user_id}/{role}", response_model=ProfileCheckResponse)
def verify_profile(
    user_id: int,
    role: str,
    store: DiagnosticStore = Depends(get_store),
    engine: DiagnosticEngine = Depends(get_diagnostic_engine),
) -> ProfileCheckResponse:
    has = verify_user_profile(store, user_id, role, engine.catalog)
    return ProfileCheckResponse(user_id=user_id, role=role, has_profile=has)

"""
Authentication Endpoints
Staff and admin login
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from unileave.database import get_db
from unileave.schemas.auth import LoginResponse, UserLogin
from unileave.services.auth_service import AuthService

router = APIRouter(tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Verify credentials for the requested role and return the user with an access token"""
    return AuthService(db).login(credentials.email, credentials.password, credentials.role)

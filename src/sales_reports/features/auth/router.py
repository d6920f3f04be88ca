"""Token endpoint for report clients."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from . import schemas
from .security import create_access_token
from .service import authenticate_operator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/token", response_model=schemas.Token)
async def issue_report_token(form_data: Annotated[OAuth2PasswordRequestForm, Depends()]):
    operator = await authenticate_operator(form_data.username, form_data.password)
    if operator is None:
        logger.info(f"Failed login for {form_data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not operator.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
    return schemas.Token(access_token=create_access_token(data={"sub": operator.username}))

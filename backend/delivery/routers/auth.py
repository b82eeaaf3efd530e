import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from delivery.auth.deps import get_settings
from delivery.core.config import Settings
from delivery.core.errors import Conflict, ValidationFailed, validation_message
from delivery.core.security import create_access_token, hash_password, verify_password
from delivery.db.mongo import db
from delivery.schemas.user import LoginIn, RegisterForm, RegisterIn

logger = logging.getLogger("delivery.auth")

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=201)
async def register(form: RegisterForm, database=Depends(db)):
    # an existing account wins over format errors
    if await database.users.find_one({"email": form.email}):
        raise Conflict("User already exists")

    try:
        body = RegisterIn.model_validate(form.model_dump())
    except ValidationError as exc:
        raise ValidationFailed(validation_message(exc))

    now = datetime.now(timezone.utc)
    await database.users.insert_one({
        "email": body.email,
        "password": hash_password(body.password),
        "role": body.role,
        "createdAt": now,
        "updatedAt": now,
    })
    logger.info(f"[Auth] Registered {body.email} ({body.role})")
    return {"message": "User registered successfully"}


@router.post("/login")
async def login(body: LoginIn, database=Depends(db), settings: Settings = Depends(get_settings)):
    user = await database.users.find_one({"email": body.email})
    if not user or not verify_password(body.password, user["password"]):
        logger.warning(f"[Auth] Failed login for {body.email}")
        raise HTTPException(status_code=400, detail="Invalid credentials")

    token = create_access_token({"id": str(user["_id"])}, role=user["role"], settings=settings)
    logger.info(f"[Auth] User logged in: {body.email} ({user['role']})")
    return {"message": f"Welcome {user['role']}", "token": token}

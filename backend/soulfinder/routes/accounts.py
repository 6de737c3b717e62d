"""
SoulFinder Backend: Account Route Handlers
=============================================

What:  Login bookkeeping, admin user listing and role management.

Role changes are admin-only. `/update-role/{email}` and
`/premium-role-update/{email}` share the same gate.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from soulfinder.dependencies import get_database
from soulfinder.schemas.account import AccountLogin, AccountLoginResponse, RoleResponse, RoleUpdate
from soulfinder.schemas.auth import Identity
from soulfinder.schemas.common import ErrorResponse, MessageResponse
from soulfinder.security import ensure_same_account, verify_admin, verify_token
from soulfinder.services.account_service import account_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Accounts"])


@router.post("/add-users", response_model=AccountLoginResponse, summary="Create account or record a login")
async def add_user(
    login: AccountLogin,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> AccountLoginResponse:
    return await account_service.record_login(db, login)


@router.get("/all-users", summary="List accounts (admin)")
async def list_users(
    search: Optional[str] = Query(default=None, description="Case-insensitive name/email substring"),
    _: Identity = Depends(verify_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await account_service.list_accounts(db, search)


@router.get("/user-role/{email}", response_model=RoleResponse, summary="Role of the caller's account")
async def get_user_role(
    email: str,
    identity: Identity = Depends(verify_token),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> RoleResponse:
    owner = ensure_same_account(identity, email)
    return RoleResponse(email=owner, role=await account_service.get_role(db, owner))


@router.patch(
    "/update-role/{email}",
    response_model=MessageResponse,
    responses={404: {"description": "No such account", "model": ErrorResponse}},
    summary="Set an account's role (admin)",
)
async def update_role(
    email: str,
    body: RoleUpdate,
    admin: Identity = Depends(verify_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> MessageResponse:
    await account_service.update_role(db, email, body.role)
    logger.info("%s changed role of %s to %s", admin.email, email, body.role)
    return MessageResponse(message=f"Role updated to {body.role}")

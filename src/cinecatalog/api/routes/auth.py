"""Authentication and user administration endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cinecatalog.api.deps import get_current_user, list_query, require_admin
from cinecatalog.database import get_db
from cinecatalog.models.user import User
from cinecatalog.schemas.common import ApiResponse
from cinecatalog.schemas.user import (
    AccessToken,
    AuthPayload,
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdate,
    RefreshTokenRequest,
    RegisterRequest,
    UserAdminUpdate,
    UserDetail,
    UserList,
    UserResponse,
    UserStats,
)
from cinecatalog.services.auth import AuthService, UserSort
from cinecatalog.services.query_engine import ListQuery

router = APIRouter()


@router.post("/auth/register", response_model=ApiResponse[AuthPayload], status_code=201)
async def register(
    body: RegisterRequest, db: AsyncSession = Depends(get_db)
) -> ApiResponse[AuthPayload]:
    user, token, refresh_token = await AuthService(db).register(body)
    return ApiResponse(
        data=AuthPayload(
            user=UserResponse.model_validate(user), token=token, refresh_token=refresh_token
        ),
        message="User registered",
    )


@router.post("/auth/login", response_model=ApiResponse[AuthPayload])
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)) -> ApiResponse[AuthPayload]:
    user, token, refresh_token = await AuthService(db).login(body.email, body.password)
    return ApiResponse(
        data=AuthPayload(
            user=UserResponse.model_validate(user), token=token, refresh_token=refresh_token
        ),
        message="Logged in",
    )


@router.post("/auth/logout", response_model=ApiResponse[None])
async def logout(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)
) -> ApiResponse[None]:
    await AuthService(db).logout(user)
    return ApiResponse(message="Logged out")


@router.post("/auth/refresh-token", response_model=ApiResponse[AccessToken])
async def refresh_token(
    body: RefreshTokenRequest, db: AsyncSession = Depends(get_db)
) -> ApiResponse[AccessToken]:
    token = await AuthService(db).refresh(body.refresh_token)
    return ApiResponse(data=AccessToken(token=token), message="Token refreshed")


@router.get("/auth/profile", response_model=ApiResponse[UserDetail])
async def get_profile(user: User = Depends(get_current_user)) -> ApiResponse[UserDetail]:
    return ApiResponse(data=UserDetail(user=UserResponse.model_validate(user)))


@router.put("/auth/profile", response_model=ApiResponse[UserDetail])
async def update_profile(
    body: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[UserDetail]:
    user = await AuthService(db).update_profile(user, body)
    return ApiResponse(
        data=UserDetail(user=UserResponse.model_validate(user)), message="Profile updated"
    )


@router.put("/auth/change-password", response_model=ApiResponse[None])
async def change_password(
    body: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[None]:
    await AuthService(db).change_password(user, body)
    return ApiResponse(message="Password changed")


# Administration


@router.get("/auth/users", response_model=ApiResponse[UserList])
async def list_users(
    query: ListQuery = Depends(list_query),
    sort: UserSort = Query(UserSort.CREATED_AT),
    role: str = Query("all", pattern="^(user|admin|all)$"),
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[UserList]:
    page = await AuthService(db).list_users(query, sort, role)
    return ApiResponse(
        data=UserList(users=page.items, pagination=page.pagination),
        message=f"{len(page.items)} users found",
    )


@router.get("/auth/stats", response_model=ApiResponse[UserStats])
async def user_stats(
    admin: User = Depends(require_admin), db: AsyncSession = Depends(get_db)
) -> ApiResponse[UserStats]:
    stats = await AuthService(db).stats()
    return ApiResponse(data=UserStats.model_validate(stats), message="User statistics")


@router.get("/auth/users/{user_id}", response_model=ApiResponse[UserDetail])
async def get_user(
    user_id: str,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[UserDetail]:
    user = await AuthService(db).get_user(user_id)
    return ApiResponse(data=UserDetail(user=UserResponse.model_validate(user)), message="User found")


@router.put("/auth/users/{user_id}", response_model=ApiResponse[UserDetail])
async def update_user(
    user_id: str,
    body: UserAdminUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[UserDetail]:
    user = await AuthService(db).update_user(user_id, body)
    return ApiResponse(
        data=UserDetail(user=UserResponse.model_validate(user)), message="User updated"
    )


@router.delete("/auth/users/{user_id}", response_model=ApiResponse[UserDetail])
async def delete_user(
    user_id: str,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[UserDetail]:
    user = await AuthService(db).deactivate_user(user_id, admin.id)
    return ApiResponse(
        data=UserDetail(user=UserResponse.model_validate(user)), message="User deactivated"
    )

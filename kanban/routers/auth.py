from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from kanban.core.database import get_db
from kanban.core.errors import ConflictError, UnauthorizedError
from kanban.core.security import create_access_token, create_refresh_token, verify_token
from kanban.models.user import User
from kanban.routers.deps import get_current_user
from kanban.schemas.common import dump, success
from kanban.schemas.user import UserCreate, UserResponse, UserSummary, LoginRequest, RefreshRequest

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(user_data: UserCreate, db: Session = Depends(get_db)):
    """Créer un nouvel utilisateur"""

    # Vérifie si l'email existe déjà
    existing_user = db.query(User).filter(User.email == user_data.email).first()
    if existing_user:
        raise ConflictError("User already exist with this Email")

    new_user = User(name=user_data.name, email=user_data.email)
    new_user.set_password(user_data.password)

    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    token = create_access_token(new_user.id, new_user.email)
    return success(
        {"user": dump(UserResponse, new_user), "token": token},
        message="User created successfully"
    )

@router.post("/login")
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Se connecter et recevoir les tokens"""

    user = db.query(User).filter(User.email == credentials.email).first()
    if not user or not user.verify_password(credentials.password):
        raise UnauthorizedError("Invalid Email or Password")

    return success(
        {
            "user": dump(UserSummary, user),
            "token": create_access_token(user.id, user.email),
            "refreshToken": create_refresh_token(user.id, user.email)
        },
        message="User logged in successfully"
    )

@router.post("/refresh")
def refresh(body: RefreshRequest, db: Session = Depends(get_db)):
    """Utiliser un refresh token pour obtenir un nouveau token d'accès"""

    payload = verify_token(body.refresh_token)
    if not payload or payload.get("type") != "refresh":
        raise UnauthorizedError("Invalid refresh token")

    user = db.query(User).filter(User.id == payload.get("user_id")).first()
    if not user:
        raise UnauthorizedError("User not found")

    return success({
        "token": create_access_token(user.id, user.email),
        "refreshToken": body.refresh_token
    })

@router.get("/me")
def me(current_user: User = Depends(get_current_user)):
    return success({"user": dump(UserResponse, current_user)}, message="User fetched successfully")

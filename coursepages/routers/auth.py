from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from coursepages.core.database import get_db
from coursepages.core.deps import get_current_author
from coursepages.core.security import create_access_token, create_refresh_token, verify_token
from coursepages.models.author import Author
from coursepages.schemas.author import AuthorCreate, AuthorResponse, LoginRequest, RefreshRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["auth"])


def _tokens_for(author: Author) -> dict:
    return {
        "access_token": create_access_token(author.id, author.email),
        "refresh_token": create_refresh_token(author.id, author.email),
        "token_type": "bearer"
    }


@router.post("/signup", response_model=AuthorResponse, status_code=status.HTTP_201_CREATED)
def signup(author_data: AuthorCreate, db: Session = Depends(get_db)):
    """Créer un compte auteur"""

    # Vérifie si l'email existe déjà
    if db.query(Author).filter(Author.email == author_data.email).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    # Vérifie si le username existe déjà
    if db.query(Author).filter(Author.username == author_data.username).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already taken")

    new_author = Author(email=author_data.email, username=author_data.username)
    new_author.set_password(author_data.password)

    db.add(new_author)
    db.commit()
    db.refresh(new_author)

    return new_author


@router.post("/login", response_model=TokenResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Se connecter et recevoir les tokens"""
    author = db.query(Author).filter(Author.email == credentials.email).first()
    if not author or not author.verify_password(credentials.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    return _tokens_for(author)


@router.post("/refresh", response_model=TokenResponse)
def refresh(data: RefreshRequest, db: Session = Depends(get_db)):
    """Nouveau couple de tokens à partir du refresh token"""
    payload = verify_token(data.refresh_token, expected_type="refresh")
    if payload is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")

    author = db.query(Author).filter(Author.id == payload.get("author_id")).first()
    if not author:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Author not found")

    return _tokens_for(author)


@router.get("/me", response_model=AuthorResponse)
def me(current_author: Author = Depends(get_current_author)):
    return current_author

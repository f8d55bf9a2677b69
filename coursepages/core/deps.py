from typing import Optional
from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session
from coursepages.core.config import settings
from coursepages.core.database import get_db
from coursepages.core.security import decode_token
from coursepages.models.author import Author


def get_current_author(db: Session = Depends(get_db), authorization: Optional[str] = Header(None)) -> Author:
    """
    Récupère l'auteur depuis le JWT token.

    Réutilisé par tous les endpoints d'écriture: extrait le token du header
    Authorization, le valide, et retourne l'auteur.
    """
    if not authorization:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")

    token = authorization.replace("Bearer ", "")
    author_id = decode_token(token)
    if not author_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    author = db.query(Author).filter(Author.id == author_id).first()
    if not author:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Author not found")

    return author


async def read_markdown_document(request: Request, content_length: Optional[int] = Header(None)) -> bytes:
    """
    Lit le document markdown brut d'un import.

    Refuse avant lecture si Content-Length dépasse MAX_PAGE_SIZE, puis coupe
    la lecture dès que la limite est franchie (body envoyé sans longueur).
    """
    if content_length is not None and content_length > settings.MAX_PAGE_SIZE:
        raise HTTPException(status_code=413, detail="Document too large")

    chunks = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > settings.MAX_PAGE_SIZE:
            raise HTTPException(status_code=413, detail="Document too large")
        chunks.append(chunk)
    return b"".join(chunks)

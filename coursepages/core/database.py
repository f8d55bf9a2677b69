import json
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from coursepages.core.config import settings

# sqlite (tests, dev local) partagé entre les threads de FastAPI
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}


def _json_serializer(value) -> str:
    # accents gardés tels quels en base (pas de \uXXXX) pour que la recherche sur les tags marche
    return json.dumps(value, ensure_ascii=False)


engine = create_engine(settings.DATABASE_URL, echo=False, connect_args=connect_args, json_serializer=_json_serializer)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    """Dépendance session DB (une par requête)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

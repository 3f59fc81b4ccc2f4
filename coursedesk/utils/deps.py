from fastapi import Request

from coursedesk.core.database import SessionLocal
from coursedesk.utils.service_registry import ServiceRegistry

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_transactional_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

def get_services(request: Request) -> ServiceRegistry:
    return request.app.state.services

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import storage
from ..auth import require_role
from ..database import get_db
from ..dependencies import get_twitter_processor
from ..schemas import ApplicationResponse, UserResponse

router = APIRouter(prefix="/admin", dependencies=[Depends(require_role("admin"))])


@router.get("/users", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db)):
    return storage.get_all_users(db)


@router.get("/applications", response_model=List[ApplicationResponse])
def list_applications(db: Session = Depends(get_db)):
    return storage.get_all_applications(db)


@router.post("/ingest")
def ingest_twitter_jobs(db: Session = Depends(get_db), processor=Depends(get_twitter_processor)):
    """Pull new job tweets now instead of waiting for the scheduler"""
    results = processor.process_new_tweets(db)
    return {
        "message": "Twitter ingestion completed",
        "results": results
    }

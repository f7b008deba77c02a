import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import asc
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from catalog.core.errors import InternalError
from catalog.db import get_session
from catalog.models.db_models import Cuisine
from catalog.models.recipes import CuisineRead

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/cuisine", response_model=List[CuisineRead])
def list_cuisines(session: Session = Depends(get_session)) -> List[CuisineRead]:
    try:
        rows = session.exec(select(Cuisine).order_by(asc(col(Cuisine.name)))).all()
    except SQLAlchemyError as e:
        logger.exception("Error fetching cuisines")
        raise InternalError("Internal server error", e)

    return [CuisineRead(id=c.id, name=c.name) for c in rows]

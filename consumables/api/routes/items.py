from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import PlainTextResponse
import logging

from consumables.domain.Catalogue import Catalogue
from consumables.domain.Consumable import Consumable
from consumables.domain.exceptions import ParseError, WriteError
from consumables.utilities.constants import PING_MESSAGE

router = APIRouter()
logger = logging.getLogger(__name__)


def get_catalogue(request: Request) -> Catalogue:
    """The catalogue built at startup by create_app."""
    return request.app.state.catalogue


def _render(items: List[Consumable]) -> list:
    return [item.to_dict() for item in items]


@router.get("/ping", response_class=PlainTextResponse)
def ping():
    return PING_MESSAGE


@router.get("/listAll")
def list_all(catalogue: Catalogue = Depends(get_catalogue)):
    return _render(catalogue.list_all())


@router.post("/addItem", status_code=201)
async def add_item(request: Request, catalogue: Catalogue = Depends(get_catalogue)):
    """Add one item posted as a JSON object; responds with the whole sorted catalogue."""
    body = await request.body()
    try:
        items = catalogue.add_json(body)
    except ParseError as e:
        logger.warning("Rejected /addItem body: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    return _render(items)


@router.post("/removeItem/{item_id}", status_code=201)
def remove_item(item_id: int, catalogue: Catalogue = Depends(get_catalogue)):
    return _render(catalogue.remove(item_id))


@router.get("/listExpired")
def list_expired(catalogue: Catalogue = Depends(get_catalogue)):
    return _render(catalogue.expired())


@router.get("/listNonExpired")
def list_non_expired(catalogue: Catalogue = Depends(get_catalogue)):
    return _render(catalogue.non_expired())


@router.get("/listExpiringIn7Days")
def list_expiring_in_7_days(catalogue: Catalogue = Depends(get_catalogue)):
    return _render(catalogue.expiring_within_7_days())


@router.get("/exit")
def exit_and_save(request: Request, catalogue: Catalogue = Depends(get_catalogue)):
    """Persist the catalogue to the configured file. The server keeps running."""
    path = request.app.state.database_path
    try:
        catalogue.save_to(path)
    except WriteError as e:
        logger.error("Failed to save catalogue: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    return Response(status_code=200)

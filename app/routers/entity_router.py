# /app/routers/entity_router.py

"""
Builds the HTML routes shared by every catalog entity.

For an entity E the routes are:
    GET  /Es                 list
    GET  /E/create           empty form       POST /E/create          create
    GET  /E/{id}/delete      confirmation     POST /E/{id}/delete     delete
    GET  /E/{id}/update      filled-in form   POST /E/{id}/update     update
    GET  /E/{id}             detail
The handlers are thin: read the request, delegate to the entity's controller,
turn its outcome into a response.
"""

from typing import Type

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from ..services.catalog_helpers.controller_base import EntityController
from ..services.database_service import DatabaseService, get_db_service
from .rendering import read_form, respond


def build_entity_router(controller_cls: Type[EntityController], singular: str, plural: str) -> APIRouter:
    router = APIRouter()

    def get_controller(db: DatabaseService = Depends(get_db_service)) -> EntityController:
        return controller_cls(db)

    # --- COLLECTION ENDPOINTS ---

    @router.get(f"/{plural}", response_class=HTMLResponse, name=f"{singular}_list", summary=f"List all {plural}")
    async def list_entities(request: Request, controller: EntityController = Depends(get_controller)):
        return respond(request, await controller.list())

    @router.get(f"/{singular}/create", response_class=HTMLResponse, name=f"{singular}_create_get", summary=f"Show the {singular} creation form")
    async def create_form(request: Request, controller: EntityController = Depends(get_controller)):
        return respond(request, await controller.create_get())

    @router.post(f"/{singular}/create", name=f"{singular}_create_post", summary=f"Create a {singular}")
    async def create_entity(request: Request, controller: EntityController = Depends(get_controller)):
        return respond(request, await controller.create_post(await read_form(request)))

    # --- INDIVIDUAL RESOURCE ENDPOINTS ---

    @router.get(f"/{singular}/{{entity_id}}/delete", response_class=HTMLResponse, name=f"{singular}_delete_get", summary=f"Confirm deletion of a {singular}")
    async def delete_form(entity_id: str, request: Request, controller: EntityController = Depends(get_controller)):
        return respond(request, await controller.delete_get(entity_id))

    @router.post(f"/{singular}/{{entity_id}}/delete", name=f"{singular}_delete_post", summary=f"Delete a {singular}")
    async def delete_entity(entity_id: str, request: Request, controller: EntityController = Depends(get_controller)):
        return respond(request, await controller.delete_post(entity_id))

    @router.get(f"/{singular}/{{entity_id}}/update", response_class=HTMLResponse, name=f"{singular}_update_get", summary=f"Show the {singular} update form")
    async def update_form(entity_id: str, request: Request, controller: EntityController = Depends(get_controller)):
        return respond(request, await controller.update_get(entity_id))

    @router.post(f"/{singular}/{{entity_id}}/update", name=f"{singular}_update_post", summary=f"Update a {singular}")
    async def update_entity(entity_id: str, request: Request, controller: EntityController = Depends(get_controller)):
        return respond(request, await controller.update_post(entity_id, await read_form(request)))

    @router.get(f"/{singular}/{{entity_id}}", response_class=HTMLResponse, name=f"{singular}_detail", summary=f"Show a single {singular}")
    async def detail(entity_id: str, request: Request, controller: EntityController = Depends(get_controller)):
        return respond(request, await controller.detail(entity_id))

    return router

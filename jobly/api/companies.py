"""Routes for companies."""

from aiohttp import web

from jobly.db.crud import companies_crud
from jobly.db.models import (
    CompanyCreate,
    CompanySearch,
    CompanyUpdate,
    validate_payload,
)

from .middleware import DB_KEY, read_json

routes = web.RouteTableDef()


@routes.post("/companies")
async def create_company(request: web.Request) -> web.Response:
    """POST /companies { handle, name, description, numEmployees, logoUrl } => 201 { company }"""
    data = validate_payload(CompanyCreate, await read_json(request))
    company = await companies_crud.create(data, db=request.app[DB_KEY])
    return web.json_response({"company": company}, status=201)


@routes.get("/companies")
async def list_companies(request: web.Request) -> web.Response:
    """
    GET /companies => { companies: [{ handle, name, description, numEmployees, logoUrl }, ...] }

    Optional query filters:
    - name: case-insensitive partial match
    - minEmployees
    - maxEmployees
    """
    filters = validate_payload(CompanySearch, request.query)
    companies = await companies_crud.find_all(filters, db=request.app[DB_KEY])
    return web.json_response({"companies": companies})


@routes.get("/companies/{handle}")
async def get_company(request: web.Request) -> web.Response:
    """GET /companies/[handle] => { company } where company includes its jobs"""
    company = await companies_crud.get(
        request.match_info["handle"], db=request.app[DB_KEY]
    )
    return web.json_response({"company": company})


@routes.patch("/companies/{handle}")
async def update_company(request: web.Request) -> web.Response:
    data = validate_payload(CompanyUpdate, await read_json(request))
    company = await companies_crud.update(
        request.match_info["handle"], data, db=request.app[DB_KEY]
    )
    return web.json_response({"company": company})


@routes.delete("/companies/{handle}")
async def delete_company(request: web.Request) -> web.Response:
    handle = request.match_info["handle"]
    await companies_crud.remove(handle, db=request.app[DB_KEY])
    return web.json_response({"deleted": handle})

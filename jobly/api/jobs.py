"""Routes for jobs."""

from aiohttp import web

from jobly.db.crud import jobs_crud
from jobly.db.models import JobCreate, JobSearch, JobUpdate, validate_payload
from jobly.errors import NotFoundError

from .middleware import DB_KEY, read_json

# jobs.id is a 32-bit INTEGER column
MAX_JOB_ID = 2**31 - 1

routes = web.RouteTableDef()


def job_id_from(request: web.Request) -> int:
    """Read the job id from the path; ids past the column range cannot exist."""
    job_id = int(request.match_info["id"])
    if job_id > MAX_JOB_ID:
        raise NotFoundError(f"No job: {job_id}")
    return job_id


@routes.post("/jobs")
async def create_job(request: web.Request) -> web.Response:
    """POST /jobs { title, salary, equity, companyHandle } => 201 { job }"""
    data = validate_payload(JobCreate, await read_json(request))
    job = await jobs_crud.create(data, db=request.app[DB_KEY])
    return web.json_response({"job": job}, status=201)


@routes.get("/jobs")
async def list_jobs(request: web.Request) -> web.Response:
    """
    GET /jobs => { jobs: [{ id, title, salary, equity, companyHandle }, ...] }

    Optional query filters:
    - title: case-insensitive partial match
    - minSalary
    - hasEquity: if true, only jobs with non-zero equity
    """
    filters = validate_payload(JobSearch, request.query)
    jobs = await jobs_crud.find_all(filters, db=request.app[DB_KEY])
    return web.json_response({"jobs": jobs})


@routes.get(r"/jobs/{id:\d+}")
async def get_job(request: web.Request) -> web.Response:
    job = await jobs_crud.get(job_id_from(request), db=request.app[DB_KEY])
    return web.json_response({"job": job})


@routes.patch(r"/jobs/{id:\d+}")
async def update_job(request: web.Request) -> web.Response:
    """PATCH /jobs/[id] { title, salary, equity } => { job }"""
    data = validate_payload(JobUpdate, await read_json(request))
    job = await jobs_crud.update(
        job_id_from(request), data, db=request.app[DB_KEY]
    )
    return web.json_response({"job": job})


@routes.delete(r"/jobs/{id:\d+}")
async def delete_job(request: web.Request) -> web.Response:
    job_id = job_id_from(request)
    await jobs_crud.remove(job_id, db=request.app[DB_KEY])
    return web.json_response({"deleted": f"Job {job_id}"})

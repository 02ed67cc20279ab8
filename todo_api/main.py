import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pymongo.database import Database
from todo_api.database import create_client, get_database, ensure_indexes
from todo_api.routers import todos, users

logger = logging.getLogger(__name__)


def create_app(db: Optional[Database] = None) -> FastAPI:
	"""Build the application around a store handle.

	When no database is given a MongoClient is opened from MONGODB_URI and
	closed again on shutdown; a provided database is left to its owner.
	ASGI servers call this as a factory, so importing the module opens nothing.
	"""
	client = None
	if db is None:
		client = create_client()
		db = get_database(client)

	@asynccontextmanager
	async def lifespan(app: FastAPI):
		# pymongo blocks; keep it off the event loop
		await run_in_threadpool(ensure_indexes, db)
		yield
		if client is not None:
			client.close()

	app = FastAPI(title="Todo API", lifespan=lifespan)
	app.state.db = db

	# API routers
	app.include_router(todos.router)
	app.include_router(users.router)

	# Malformed bodies are client errors like any other: 400, not FastAPI's 422
	@app.exception_handler(RequestValidationError)
	async def validation_exception_handler(request, exc):
		return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

	# Generic error handler to return JSON errors for unexpected exceptions
	@app.exception_handler(Exception)
	async def generic_exception_handler(request, exc):
		logger.exception("Unhandled error on %s %s", request.method, request.url.path)
		return JSONResponse(status_code=500, content={"detail": "Internal server error"})

	return app

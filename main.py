import logging
from contextlib import asynccontextmanager

import firebase_admin
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from firebase_admin import credentials
from starlette.middleware.cors import CORSMiddleware

from config import FIREBASE_CREDENTIALS, CORS_ORIGINS, LOG_LEVEL, HOST, PORT
from routes.posts import router as posts_router
from services.errors import PostServiceError
from services.firestore import FirestoreDB

logging.basicConfig(level=LOG_LEVEL,
                    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize Firebase Admin SDK
    cred = credentials.Certificate(FIREBASE_CREDENTIALS)
    firebase_app = firebase_admin.initialize_app(cred)

    app.state.firestore = FirestoreDB(firebase_app)
    logger.info("Connected to Firestore project '%s'", firebase_app.project_id)

    yield
    # Cleanup resources
    app.state.firestore = None
    firebase_admin.delete_app(firebase_app)


app = FastAPI(lifespan=lifespan)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report invalid request fields as 400 with one entry per field"""
    errors = [
        {
            "msg": error["msg"],
            "param": str(error["loc"][-1]) if error["loc"] else None,
            "location": error["loc"][0] if error["loc"] else None,
        }
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"errors": errors})


@app.exception_handler(PostServiceError)
async def post_service_error_handler(request: Request, exc: PostServiceError):
    return JSONResponse(status_code=exc.status_code, content={"msg": exc.message})


@app.exception_handler(Exception)
async def server_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse("Server Error", status_code=500)


@app.get("/")
async def root():
    return {"message": "Posts API is running"}


# Include routers
app.include_router(posts_router, prefix="/posts", tags=["posts"])


if __name__ == "__main__":
    uvicorn.run("main:app", host=HOST, port=PORT)

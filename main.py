import os
from contextlib import asynccontextmanager

import firebase_admin
from dotenv import load_dotenv
from fastapi import FastAPI
from firebase_admin import credentials
from starlette.middleware.cors import CORSMiddleware

from routes.posts import router as posts_router
from services.posts_repository import PostsRepository
from viewmodels.posts import PostsViewModel

load_dotenv()


def parse_origins(value: str) -> list[str]:
    """Split a comma separated origins setting, ignoring blanks"""
    return [origin.strip() for origin in value.split(",") if origin.strip()]


FIREBASE_CREDENTIALS = os.environ.get("FIREBASE_CREDENTIALS", "./firebase.json")
CORS_ORIGINS = parse_origins(os.environ.get("CORS_ORIGINS", "http://localhost:3000"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize Firebase Admin SDK
    cred = credentials.Certificate(FIREBASE_CREDENTIALS)
    firebase_app = firebase_admin.initialize_app(cred)

    # Initialize dependencies
    posts_repository = PostsRepository(firebase_app)
    posts_view_model = PostsViewModel(posts_repository)

    app.state.posts_view_model = posts_view_model

    # Load the feed as soon as the app comes up
    app.state.initial_fetch = posts_view_model.fetch_posts()

    yield
    # Cleanup resources
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

# Include routers
app.include_router(posts_router, prefix="/posts", tags=["posts"])

import os

from dotenv import load_dotenv

load_dotenv()

# Firebase service account used to initialize the Admin SDK
FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS", "./firebase.json")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

TOKEN_CLOCK_SKEW_SECONDS = int(os.getenv("TOKEN_CLOCK_SKEW_SECONDS", "10"))

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))

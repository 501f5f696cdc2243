from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import public


app = FastAPI(
    title="Policy Tracker API",
    version="0.1.0",
    description="政策スコアの累積平均・トレンド線を返すAPI",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:4173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(public.router, tags=["public"])


@app.get("/healthz", tags=["health"])
def healthcheck() -> dict:
    """簡易ヘルスチェック"""
    return {"status": "ok"}

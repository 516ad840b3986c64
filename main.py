"""
Root entrypoint — run with:
    uvicorn main:app
    or:  uv run uvicorn main:app

Run a single worker: device sessions are held in process memory.
"""

from app.main import app  # noqa: F401

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, workers=1)

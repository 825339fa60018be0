"""Run the Crypto Tracker API with uvicorn."""

import os

import uvicorn


if __name__ == "__main__":
    host = os.getenv("CRYPTOTRACKER_HOST", "127.0.0.1")
    port = int(os.getenv("CRYPTOTRACKER_PORT", "8000"))
    uvicorn.run("cryptotracker.api.app:create_app", factory=True, host=host, port=port)

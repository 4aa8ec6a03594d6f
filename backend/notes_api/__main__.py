import uvicorn

from notes_api.config import Settings

if __name__ == "__main__":
    settings = Settings.from_env()
    uvicorn.run("notes_api.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())

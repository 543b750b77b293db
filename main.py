from splitbook.main import app

if __name__ == "__main__":
    import uvicorn
    from splitbook.core.config import settings

    uvicorn.run("splitbook.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)

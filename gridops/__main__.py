import uvicorn

from gridops.config import HOST, PORT, IS_DEV

if __name__ == "__main__":
    uvicorn.run("gridops.main:app", host=HOST, port=PORT, reload=IS_DEV)

"""Run with: python -m propdoc"""

import uvicorn
from propdoc.config import settings

if __name__ == "__main__":
    uvicorn.run("propdoc.main:app", host=settings.HOST, port=settings.PORT)

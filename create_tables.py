from loguru import logger

from codelang.db import models  # noqa: F401  # Registers every table on the metadata
from codelang.db.base import Base
from codelang.db.session import dispose_engine, engine

if __name__ == "__main__":
    logger.info("Creating tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created.")
    dispose_engine()

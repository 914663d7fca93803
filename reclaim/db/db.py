import os
from sqlmodel import Session, SQLModel, create_engine

# Register tables on the metadata
from reclaim.models.user import User  # noqa: F401
from reclaim.models.found_item import FoundItem  # noqa: F401
from reclaim.models.lost_item import LostItem  # noqa: F401
from reclaim.models.claim import Claim  # noqa: F401
from reclaim.models.successful_return import SuccessfulReturn  # noqa: F401

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./reclaim.db")


def build_engine(url: str, echo: bool = False):
    if url.startswith("sqlite"):
        # Requests are served from a thread pool; wait on the write lock instead of failing fast
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": 30},
        )

    return create_engine(
        url,

        pool_pre_ping=True,
        pool_timeout=30,

        echo=echo,
    )


engine = build_engine(DATABASE_URL, echo=os.getenv("SQL_ECHO", "false").lower() == "true")


def create_db_and_tables(bind=None):
    SQLModel.metadata.create_all(bind or engine)


def get_session():
    with Session(engine) as session:
        yield session

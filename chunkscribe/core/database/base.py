# File: chunkscribe/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. Job and media records inherit from this.
Base = declarative_base()

# backend/sitefactory/__init__.py
from .config import settings
from .database import Base, create_db_engine
from . import models
from . import schemas
from . import stores
from . import services
from . import api

__version__ = "0.1.0"

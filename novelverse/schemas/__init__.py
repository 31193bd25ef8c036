# Import all schemas
from novelverse.schemas.bookmark import *
from novelverse.schemas.chapter import *
from novelverse.schemas.comment import *
from novelverse.schemas.like import *
from novelverse.schemas.novel import *
from novelverse.schemas.reading_history import *
from novelverse.schemas.response import *
from novelverse.schemas.token import *
from novelverse.schemas.user import *
from novelverse.schemas.user_settings import *

import enum


class Genre(str, enum.Enum):
    FANTASY = "Fantasy"
    SCIENCE_FICTION = "Science Fiction"
    ROMANCE = "Romance"
    MYSTERY = "Mystery"
    HORROR = "Horror"
    HISTORICAL = "Historical"
    ADVENTURE = "Adventure"
    DRAMA = "Drama"
    THRILLER = "Thriller"
    COMEDY = "Comedy"
    POETRY = "Poetry"
    OTHER = "Other"


# Reading preferences applied when a user has no settings row yet
DEFAULT_USER_SETTINGS = {
    "theme": "dark",
    "font_size": 18,
    "font_family": "serif",
    "line_spacing": 150,
    "background_color": "dark",
}

MAX_RATING = 5
MAX_PROGRESS = 100

DEFAULT_SHOWCASE_LIMIT = 4

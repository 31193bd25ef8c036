from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

# Generic type for data payload
T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response schema with message support"""

    success: bool = True
    message: str
    data: Optional[T] = None
    errors: Optional[List[Any]] = None
    meta: Optional[Dict[str, Any]] = None


class SuccessResponse(APIResponse[T]):
    """Success response with data"""

    success: bool = True
    message: str = "Operation completed successfully"
    data: Optional[T] = None
    meta: Optional[Dict[str, Any]] = None


class ErrorResponse(APIResponse[None]):
    """Error response with error details"""

    success: bool = False
    message: str = "An error occurred"
    data: None = None
    errors: Optional[List[Any]] = None


class CreateResponse(APIResponse[T]):
    """Response for create operations"""

    success: bool = True
    message: str = "Created successfully"
    data: Optional[T] = None


class UpdateResponse(APIResponse[T]):
    """Response for update operations"""

    success: bool = True
    message: str = "Updated successfully"
    data: Optional[T] = None


class ListResponse(APIResponse[List[T]]):
    """Response for list operations"""

    success: bool = True
    message: str = "Data retrieved successfully"
    data: Optional[List[T]] = None
    meta: Optional[Dict[str, Any]] = None


# Specific success messages for different operations
class Messages:
    # User messages
    USER_UPDATED = "User profile updated successfully"
    USER_RETRIEVED = "User retrieved successfully"

    # Novel messages
    NOVEL_CREATED = "Novel created successfully"
    NOVEL_UPDATED = "Novel updated successfully"
    NOVEL_RETRIEVED = "Novel retrieved successfully"
    NOVELS_RETRIEVED = "Novels retrieved successfully"
    SEARCH_QUERY_REQUIRED = "Search query is required"
    SEARCH_COMPLETED = "Search completed successfully"

    # Chapter messages
    CHAPTER_CREATED = "Chapter created successfully"
    CHAPTER_UPDATED = "Chapter updated successfully"
    CHAPTER_RETRIEVED = "Chapter retrieved successfully"
    CHAPTERS_RETRIEVED = "Chapters retrieved successfully"

    # Comment messages
    COMMENT_CREATED = "Comment posted successfully"
    COMMENTS_RETRIEVED = "Comments retrieved successfully"

    # Bookmark messages
    BOOKMARK_SAVED = "Bookmark saved successfully"
    BOOKMARKS_RETRIEVED = "Bookmarks retrieved successfully"

    # Reading history messages
    READING_HISTORY_UPDATED = "Reading progress saved successfully"
    READING_HISTORY_RETRIEVED = "Reading history retrieved successfully"

    # Like messages
    LIKE_ADDED = "Novel liked successfully"
    LIKES_RETRIEVED = "Likes retrieved successfully"

    # User settings messages
    SETTINGS_RETRIEVED = "Reading settings retrieved successfully"
    SETTINGS_UPDATED = "Reading settings updated successfully"

    # Admin messages
    STATS_RETRIEVED = "Platform statistics retrieved successfully"

    # Authentication messages
    LOGIN_SUCCESSFUL = "Login successful"
    LOGOUT_SUCCESS = "Logout successful"
    REGISTER_SUCCESS = "Registration successful"

    # General messages
    DATA_RETRIEVED = "Data retrieved successfully"
    INVALID_REQUEST = "Invalid request data"
    INTERNAL_ERROR = "Internal server error occurred"

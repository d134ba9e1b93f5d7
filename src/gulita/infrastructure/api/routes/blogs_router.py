"""Blog API routes.

Reading is public; writing requires authentication.
"""

from typing import Literal

from fastapi import APIRouter, Query, status

from gulita.domain.services.blog_service import MAX_PAGE_SIZE
from gulita.infrastructure.api.dependencies import BlogServiceDep, CurrentUser
from gulita.infrastructure.api.schemas import (
    ApiResponse,
    BlogCreateRequest,
    BlogData,
    BlogListData,
    BlogResponse,
    BlogUpdateRequest,
    ErrorResponse,
    PaginationResponse,
)

router = APIRouter()


@router.get("", response_model=ApiResponse[BlogListData])
async def list_blogs(
    blog_service: BlogServiceDep,
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE, description="Blogs per page"),
    sort_order: Literal["asc", "desc"] = Query("desc", description="Order by publication date"),
) -> ApiResponse[BlogListData]:
    """List published blogs."""
    result = await blog_service.list_blogs(page=page, limit=limit, sort_order=sort_order)
    return ApiResponse[BlogListData](
        message="Blogs retrieved successfully",
        data=BlogListData(
            blogs=[BlogResponse.model_validate(blog) for blog in result.blogs],
            pagination=PaginationResponse(
                current_page=result.current_page,
                limit=result.limit,
                total_pages=result.total_pages,
                total_blogs=result.total_blogs,
            ),
        ),
    )


@router.get(
    "/{blog_id}",
    response_model=ApiResponse[BlogData],
    responses={404: {"model": ErrorResponse, "description": "Blog not found"}},
)
async def get_blog(blog_id: str, blog_service: BlogServiceDep) -> ApiResponse[BlogData]:
    """Get a blog post by ID."""
    blog = await blog_service.get_blog(blog_id)
    return ApiResponse[BlogData](
        message="Blog retrieved successfully",
        data=BlogData(blog=BlogResponse.model_validate(blog)),
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[BlogData],
    responses={
        400: {"model": ErrorResponse, "description": "Validation error or unknown category"},
        409: {"model": ErrorResponse, "description": "Title already used"},
    },
)
async def create_blog(
    request: BlogCreateRequest,
    current_user: CurrentUser,
    blog_service: BlogServiceDep,
) -> ApiResponse[BlogData]:
    """Create a blog post."""
    blog = await blog_service.create_blog(request.model_dump(exclude_unset=True))
    return ApiResponse[BlogData](
        message="Blog created successfully",
        data=BlogData(blog=BlogResponse.model_validate(blog)),
    )


@router.put(
    "/{blog_id}",
    response_model=ApiResponse[BlogData],
    responses={
        404: {"model": ErrorResponse, "description": "Blog not found"},
        409: {"model": ErrorResponse, "description": "Title already used"},
    },
)
async def update_blog(
    blog_id: str,
    request: BlogUpdateRequest,
    current_user: CurrentUser,
    blog_service: BlogServiceDep,
) -> ApiResponse[BlogData]:
    """Update the fields of a blog post present in the body."""
    blog = await blog_service.update_blog(blog_id, request.model_dump(exclude_unset=True))
    return ApiResponse[BlogData](
        message="Blog updated successfully",
        data=BlogData(blog=BlogResponse.model_validate(blog)),
    )


@router.delete(
    "/{blog_id}",
    response_model=ApiResponse[None],
    responses={404: {"model": ErrorResponse, "description": "Blog not found"}},
)
async def delete_blog(
    blog_id: str,
    current_user: CurrentUser,
    blog_service: BlogServiceDep,
) -> ApiResponse[None]:
    """Delete a blog post."""
    await blog_service.delete_blog(blog_id)
    return ApiResponse[None](message="Blog deleted successfully")

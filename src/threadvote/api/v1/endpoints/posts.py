"""Post-related endpoints for the Threadvote API."""

from fastapi import APIRouter, status

from threadvote.api.v1.dependencies import CurrentUsernameDep, ListingDep, PostServiceDep
from threadvote.models import Post, VoteType
from threadvote.schemas.post import PostCreate, PostEdit, PostResponse
from threadvote.schemas.vote import MyVoteResponse, VoteOutcomeResponse
from threadvote.services.votes import VoteOutcome

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/subreddit/{subreddit_name}", response_model=list[PostResponse])
async def list_posts_by_subreddit(
    subreddit_name: str,
    service: PostServiceDep,
    params: ListingDep,
) -> list[Post]:
    """List one page of a subreddit's posts."""
    return service.list_by_subreddit(subreddit_name, params)


@router.get("/user/{username}", response_model=list[PostResponse])
async def list_posts_by_user(
    username: str,
    service: PostServiceDep,
    params: ListingDep,
) -> list[Post]:
    """List one page of posts written by ``username``."""
    return service.list_by_author(username, params)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, service: PostServiceDep) -> Post:
    """Get a post by ID; deleted posts are returned masked."""
    return service.get(post_id)


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    username: CurrentUsernameDep,
    service: PostServiceDep,
) -> Post:
    """Create a post; it starts with its author's upvote."""
    return service.create(username, post_data)


@router.patch("/{post_id}", response_model=PostResponse)
async def edit_post(
    post_id: str,
    edit: PostEdit,
    username: CurrentUsernameDep,
    service: PostServiceDep,
) -> Post:
    """Edit a post's title and body (author only)."""
    return service.edit(post_id, username, edit)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    username: CurrentUsernameDep,
    service: PostServiceDep,
) -> None:
    """Soft-delete a post (author only)."""
    service.delete(post_id, username)


@router.post("/{post_id}/votes/{vote_type}", response_model=VoteOutcomeResponse)
async def vote_post(
    post_id: str,
    vote_type: VoteType,
    username: CurrentUsernameDep,
    service: PostServiceDep,
) -> VoteOutcome:
    """Toggle the caller's vote on a post."""
    return service.vote(post_id, vote_type, username)


@router.get("/{post_id}/my-vote", response_model=MyVoteResponse)
async def get_my_post_vote(
    post_id: str,
    username: CurrentUsernameDep,
    service: PostServiceDep,
) -> MyVoteResponse:
    """Get the caller's current vote on a post."""
    return MyVoteResponse(vote_type=service.my_vote(post_id, username))

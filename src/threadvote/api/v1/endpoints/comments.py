"""Comment-related endpoints for the Threadvote API."""

from fastapi import APIRouter, status

from threadvote.api.v1.dependencies import CommentServiceDep, CurrentUsernameDep, ListingDep
from threadvote.models import Comment, VoteType
from threadvote.schemas.comment import (
    CommentCreate,
    CommentEdit,
    CommentResponse,
    CommentTreeResponse,
)
from threadvote.schemas.vote import MyVoteResponse, VoteOutcomeResponse
from threadvote.services.comment_tree import CommentTree
from threadvote.services.votes import VoteOutcome

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/post/{post_id}", response_model=list[CommentTreeResponse])
async def get_comment_tree(
    post_id: str,
    service: CommentServiceDep,
    params: ListingDep,
) -> list[CommentTree]:
    """Return a page of root comments, each with every reply nested below it."""
    return service.tree_for_post(post_id, params)


@router.get("/user/{username}", response_model=list[CommentResponse])
async def list_comments_by_user(
    username: str,
    service: CommentServiceDep,
    params: ListingDep,
) -> list[Comment]:
    return service.list_by_author(username, params)


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(comment_id: str, service: CommentServiceDep) -> Comment:
    return service.get(comment_id)


@router.post("/", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    comment_data: CommentCreate,
    username: CurrentUsernameDep,
    service: CommentServiceDep,
) -> Comment:
    """Comment on a post or reply to a comment of the same post."""
    return service.create(username, comment_data)


@router.patch("/{comment_id}", response_model=CommentResponse)
async def edit_comment(
    comment_id: str,
    edit: CommentEdit,
    username: CurrentUsernameDep,
    service: CommentServiceDep,
) -> Comment:
    return service.edit(comment_id, username, edit)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    username: CurrentUsernameDep,
    service: CommentServiceDep,
) -> None:
    service.delete(comment_id, username)


@router.post("/{comment_id}/votes/{vote_type}", response_model=VoteOutcomeResponse)
async def vote_comment(
    comment_id: str,
    vote_type: VoteType,
    username: CurrentUsernameDep,
    service: CommentServiceDep,
) -> VoteOutcome:
    """Toggle the caller's vote on a comment."""
    return service.vote(comment_id, vote_type, username)


@router.get("/{comment_id}/my-vote", response_model=MyVoteResponse)
async def get_my_comment_vote(
    comment_id: str,
    username: CurrentUsernameDep,
    service: CommentServiceDep,
) -> MyVoteResponse:
    return MyVoteResponse(vote_type=service.my_vote(comment_id, username))

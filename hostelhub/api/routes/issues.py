from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from hostelhub.api.deps import get_db, enum_filter
from hostelhub.core.auth import Actor, get_current_user
from hostelhub.models.enums import (
    IssueCategory, IssuePriority, IssueStatus, CATEGORY_ALIASES, PRIORITY_ALIASES,
)
from hostelhub.schemas.issue import (
    CategorySuggestion, CommentCreate, CommentOut, IssueCreate, IssueDetailOut,
    IssueFilters, IssueListItem, IssueOut, IssueUpdate, ReactionCreate, ReactionResult,
    SuggestRequest,
)
from hostelhub.services import issues
from hostelhub.services.heuristics import default_categorizer, suggest_categories

router = APIRouter(prefix="/issues", tags=["issues"])


@router.get("", response_model=List[IssueListItem])
def list_issues(
    db: Session = Depends(get_db),
    current_user: Actor = Depends(get_current_user),
    category: Optional[str] = Query(None),
    priority: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
):
    filters = IssueFilters(
        category=enum_filter(category, IssueCategory, "category", CATEGORY_ALIASES),
        priority=enum_filter(priority, IssuePriority, "priority", PRIORITY_ALIASES),
        status=enum_filter(status, IssueStatus, "status"),
    )
    return issues.list_issues(db, current_user, filters)


@router.post("", response_model=IssueOut, status_code=status.HTTP_201_CREATED)
def create_issue(
    payload: IssueCreate,
    db: Session = Depends(get_db),
    current_user: Actor = Depends(get_current_user),
):
    return issues.create_issue(db, current_user, payload)


@router.post("/suggest", response_model=CategorySuggestion)
def suggest_category(
    payload: SuggestRequest,
    current_user: Actor = Depends(get_current_user),
):
    """Keyword guess at category and priority while the student is typing."""
    category, priority, confidence = default_categorizer.suggest(payload.title, payload.description)
    return CategorySuggestion(
        category=category,
        priority=priority,
        confidence=confidence,
        candidates=suggest_categories(f"{payload.title} {payload.description}"),
    )


@router.get("/{issue_id}", response_model=IssueDetailOut)
def get_issue(
    issue_id: int,
    db: Session = Depends(get_db),
    current_user: Actor = Depends(get_current_user),
):
    return issues.get_issue_detail(db, current_user, issue_id)


@router.patch("/{issue_id}", response_model=IssueOut)
def update_issue(
    issue_id: int,
    payload: IssueUpdate,
    db: Session = Depends(get_db),
    current_user: Actor = Depends(get_current_user),
):
    return issues.update_status(db, current_user, issue_id, payload)


@router.post("/{issue_id}/react", response_model=ReactionResult)
def react(
    issue_id: int,
    payload: ReactionCreate,
    db: Session = Depends(get_db),
    current_user: Actor = Depends(get_current_user),
):
    result, current = issues.react(db, current_user, issue_id, payload.type)
    return ReactionResult(result=result, type=current)


@router.post("/{issue_id}/comments", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def add_comment(
    issue_id: int,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    current_user: Actor = Depends(get_current_user),
):
    return issues.add_comment(db, current_user, issue_id, payload)

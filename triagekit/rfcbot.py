"""Final-comment-period records published by the rfcbot service."""

from __future__ import annotations

import json
import urllib.request
from dataclasses import dataclass
from typing import Any, Iterable, Mapping


def _require(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except (KeyError, TypeError) as err:
        raise ValueError(f"missing field `{key}`") from err


@dataclass(frozen=True)
class FCP:
    id: int
    fk_issue: int
    fk_initiator: int
    fk_initiating_comment: int
    disposition: str | None
    fk_bot_tracking_comment: int
    fcp_start: str | None
    fcp_closed: bool

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FCP:
        return cls(
            id=_require(data, "id"),
            fk_issue=_require(data, "fk_issue"),
            fk_initiator=_require(data, "fk_initiator"),
            fk_initiating_comment=_require(data, "fk_initiating_comment"),
            disposition=data.get("disposition"),
            fk_bot_tracking_comment=_require(data, "fk_bot_tracking_comment"),
            fcp_start=data.get("fcp_start"),
            fcp_closed=_require(data, "fcp_closed"),
        )


@dataclass(frozen=True)
class Reviewer:
    id: int
    login: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Reviewer:
        return cls(id=_require(data, "id"), login=_require(data, "login"))


@dataclass(frozen=True)
class Review:
    reviewer: Reviewer
    approved: bool

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Review:
        return cls(
            reviewer=Reviewer.from_dict(_require(data, "reviewer")),
            approved=_require(data, "approved"),
        )


@dataclass(frozen=True)
class FCPIssue:
    id: int
    number: int
    fk_milestone: str | None
    fk_user: int
    fk_assignee: int | None
    open: bool
    is_pull_request: bool
    title: str
    body: str
    locked: bool
    closed_at: str | None
    created_at: str | None
    updated_at: str | None
    labels: tuple[str, ...]
    repository: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FCPIssue:
        return cls(
            id=_require(data, "id"),
            number=_require(data, "number"),
            fk_milestone=data.get("fk_milestone"),
            fk_user=_require(data, "fk_user"),
            fk_assignee=data.get("fk_assignee"),
            open=_require(data, "open"),
            is_pull_request=_require(data, "is_pull_request"),
            title=_require(data, "title"),
            body=_require(data, "body"),
            locked=_require(data, "locked"),
            closed_at=data.get("closed_at"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            labels=tuple(_require(data, "labels")),
            repository=_require(data, "repository"),
        )


@dataclass(frozen=True)
class StatusComment:
    id: int
    fk_issue: int
    fk_user: int
    body: str
    created_at: str
    updated_at: str | None
    repository: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StatusComment:
        return cls(
            id=_require(data, "id"),
            fk_issue=_require(data, "fk_issue"),
            fk_user=_require(data, "fk_user"),
            body=_require(data, "body"),
            created_at=_require(data, "created_at"),
            updated_at=data.get("updated_at"),
            repository=_require(data, "repository"),
        )


@dataclass(frozen=True)
class FullFCP:
    fcp: FCP
    reviews: tuple[Review, ...]
    issue: FCPIssue
    status_comment: StatusComment

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FullFCP:
        """Build a record from its decoded JSON form; raises ValueError on missing fields."""
        return cls(
            fcp=FCP.from_dict(_require(data, "fcp")),
            reviews=tuple(Review.from_dict(r) for r in _require(data, "reviews")),
            issue=FCPIssue.from_dict(_require(data, "issue")),
            status_comment=StatusComment.from_dict(_require(data, "status_comment")),
        )

    @property
    def key(self) -> str:
        return f"{self.issue.repository}:{self.issue.number}:{self.issue.title}"


def index_fcps(fcps: Iterable[FullFCP]) -> dict[str, FullFCP]:
    """Key each record by ``repository:number:title``; later records win."""
    return {fcp.key: fcp for fcp in fcps}


def get_all_fcps(url: str) -> dict[str, FullFCP]:
    """Fetch the list of all FCPs from ``url`` and index them."""
    with urllib.request.urlopen(url) as response:
        data = json.load(response)
    if not isinstance(data, list):
        raise ValueError("expected a list of FCP records")
    return index_fcps(FullFCP.from_dict(item) for item in data)
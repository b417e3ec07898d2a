#!/usr/bin/env python3
# chan_tui/models.py
"""
Board, thread and post records decoded from the read-only JSON API.

The API encodes most flags as an optional integer that is 1 when set and
absent otherwise; opt_int_to_bool folds those to plain bools. Post carries
optional OpData (thread starters only) and Attachment (posts with a file),
detected by the presence of their keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

__all__ = [
    "opt_int_to_bool",
    "Attachment",
    "OpData",
    "Post",
    "Thread",
    "Board",
    "BoardsResponse",
]


def opt_int_to_bool(v: Any) -> bool:
    return v == 1


def _opt_int(v: Any) -> Optional[int]:
    try:
        return int(v) if v is not None else None
    except (TypeError, ValueError):
        return None


@dataclass
class Attachment:
    tim: int                # upload timestamp, also the file's id on the image host
    filename: str
    ext: str
    fsize: int
    md5: str
    w: int
    h: int
    tn_w: int
    tn_h: int
    filedeleted: bool = False
    spoiler: bool = False
    custom_spoiler: Optional[int] = None

    @classmethod
    def from_json(cls, d: Dict[str, Any]) -> Optional["Attachment"]:
        if "tim" not in d:
            return None
        return cls(
            tim=int(d["tim"]),
            filename=str(d.get("filename", "")),
            ext=str(d.get("ext", "")),
            fsize=int(d.get("fsize", 0)),
            md5=str(d.get("md5", "")),
            w=int(d.get("w", 0)),
            h=int(d.get("h", 0)),
            tn_w=int(d.get("tn_w", 0)),
            tn_h=int(d.get("tn_h", 0)),
            filedeleted=opt_int_to_bool(d.get("filedeleted")),
            spoiler=opt_int_to_bool(d.get("spoiler")),
            custom_spoiler=_opt_int(d.get("custom_spoiler")),
        )


@dataclass
class OpData:
    replies: int
    images: int
    semantic_url: str = ""
    sub: Optional[str] = None
    sticky: bool = False
    closed: bool = False
    bumplimit: bool = False
    imagelimit: bool = False
    archived: bool = False
    archived_on: Optional[int] = None
    tag: Optional[str] = None
    unique_ips: Optional[int] = None

    @classmethod
    def from_json(cls, d: Dict[str, Any]) -> Optional["OpData"]:
        if "replies" not in d:
            return None
        return cls(
            replies=int(d["replies"]),
            images=int(d.get("images", 0)),
            semantic_url=str(d.get("semantic_url", "")),
            sub=d.get("sub"),
            sticky=opt_int_to_bool(d.get("sticky")),
            closed=opt_int_to_bool(d.get("closed")),
            bumplimit=opt_int_to_bool(d.get("bumplimit")),
            imagelimit=opt_int_to_bool(d.get("imagelimit")),
            archived=opt_int_to_bool(d.get("archived")),
            archived_on=_opt_int(d.get("archived_on")),
            tag=d.get("tag"),
            unique_ips=_opt_int(d.get("unique_ips")),
        )


@dataclass
class Post:
    no: int                 # post id
    resto: int              # thread id, 0 for the thread starter
    time: int
    now: str = ""
    name: Optional[str] = None
    trip: Optional[str] = None
    id: Optional[str] = None
    capcode: Optional[str] = None
    country: Optional[str] = None
    country_name: Optional[str] = None
    com: Optional[str] = None
    since4pass: Optional[int] = None
    m_img: bool = False
    op: Optional[OpData] = None
    attachment: Optional[Attachment] = None

    @classmethod
    def from_json(cls, d: Dict[str, Any]) -> "Post":
        return cls(
            no=int(d["no"]),
            resto=int(d.get("resto", 0)),
            time=int(d.get("time", 0)),
            now=str(d.get("now", "")),
            name=d.get("name"),
            trip=d.get("trip"),
            id=d.get("id"),
            capcode=d.get("capcode"),
            country=d.get("country"),
            country_name=d.get("country_name"),
            com=d.get("com"),
            since4pass=_opt_int(d.get("since4pass")),
            m_img=opt_int_to_bool(d.get("m_img")),
            op=OpData.from_json(d),
            attachment=Attachment.from_json(d),
        )

    @property
    def subject(self) -> str:
        if self.op is not None and self.op.sub:
            return self.op.sub
        return "Thread"

    @property
    def has_thumbnail(self) -> bool:
        return self.attachment is not None and not self.attachment.filedeleted


@dataclass
class Thread:
    posts: List[Post] = field(default_factory=list)

    @classmethod
    def from_json(cls, d: Dict[str, Any]) -> "Thread":
        return cls(posts=[Post.from_json(p) for p in d.get("posts", [])])


@dataclass
class Board:
    board: str
    title: str
    sfw: bool = False
    threads_per_page: int = 0
    pages: int = 0
    max_filesize: int = 0
    bump_limit: int = 0
    image_limit: int = 0
    meta_description: str = ""
    spoilers: bool = False
    is_archived: bool = False
    text_only: bool = False
    forced_anon: bool = False
    require_subject: bool = False

    @classmethod
    def from_json(cls, d: Dict[str, Any]) -> "Board":
        return cls(
            board=str(d["board"]),
            title=str(d.get("title", "")),
            sfw=opt_int_to_bool(d.get("ws_board")),
            threads_per_page=int(d.get("per_page", 0)),
            pages=int(d.get("pages", 0)),
            max_filesize=int(d.get("max_filesize", 0)),
            bump_limit=int(d.get("bump_limit", 0)),
            image_limit=int(d.get("image_limit", 0)),
            meta_description=str(d.get("meta_description", "")),
            spoilers=opt_int_to_bool(d.get("spoilers")),
            is_archived=opt_int_to_bool(d.get("is_archived")),
            text_only=opt_int_to_bool(d.get("text_only")),
            forced_anon=opt_int_to_bool(d.get("forced_anon")),
            require_subject=opt_int_to_bool(d.get("require_subject")),
        )

    @property
    def label(self) -> str:
        return f"/{self.board}/: {self.title}"


@dataclass
class BoardsResponse:
    boards: List[Board] = field(default_factory=list)
    troll_flags: Optional[Dict[str, str]] = None

    @classmethod
    def from_json(cls, d: Dict[str, Any]) -> "BoardsResponse":
        return cls(
            boards=[Board.from_json(b) for b in d.get("boards", [])],
            troll_flags=d.get("troll_flags"),
        )

    def visible(self, show_nsfw: bool) -> List[Board]:
        return [b for b in self.boards if show_nsfw or b.sfw]

"""Stateful interaction engine for one post's comment thread.

A session keeps the flat comment rows and like state of a single post as
seen by a single viewer. Every mutation is checked locally, applied
optimistically to the flat rows, then confirmed by exactly one backend call.
The forest is always re-derived from the rows, so an optimistic patch yields
the same structure a full rebuild would.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional, TypeVar
from uuid import uuid4

import logfire

from tribuna.application.policy import ensure_can_delete, ensure_can_edit, require_user
from tribuna.application.usecase.comment import (
    AddCommentRequest,
    AddCommentUseCase,
    AddReplyRequest,
    AddReplyUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    EditCommentRequest,
    EditCommentUseCase,
)
from tribuna.application.usecase.like import ToggleLikeRequest, ToggleLikeUseCase
from tribuna.application.usecase.report import (
    ReportCommentRequest,
    ReportCommentUseCase,
)
from tribuna.config import ThreadSettings
from tribuna.domain.error import (
    BackendError,
    DomainError,
    NotFoundError,
    OperationInFlightError,
    RequestTimeoutError,
    ValidationError,
)
from tribuna.domain.model import (
    Comment,
    CommentNode,
    CommentReport,
    DisplayNode,
    Viewer,
)
from tribuna.domain.service import (
    CommentService,
    LikeService,
    build_display_forest,
    build_forest,
    normalize_content,
    normalize_description,
    parse_reason,
    sort_forest,
)
from tribuna.domain.value import (
    CommentId,
    LikeState,
    PostId,
    ReportReason,
    SortMode,
    UserId,
)

from .result import OperationResult, OperationState

T = TypeVar("T")


@dataclass(frozen=True)
class _Snapshot:
    """Pre-operation state of the one comment an operation touches."""

    comment_id: CommentId
    comment: Optional[Comment]
    like: Optional[LikeState]
    pending: bool


class ThreadSession:
    """Comment thread of one post, for one viewer.

    Operations on different comments run independently. A second operation
    on a comment that already has one in flight is rejected with
    ``OperationInFlightError`` and changes nothing.
    """

    def __init__(
        self,
        post_id: PostId,
        viewer: Viewer,
        *,
        comment_service: CommentService,
        like_service: LikeService,
        add_comment_use_case: AddCommentUseCase,
        add_reply_use_case: AddReplyUseCase,
        edit_comment_use_case: EditCommentUseCase,
        delete_comment_use_case: DeleteCommentUseCase,
        toggle_like_use_case: ToggleLikeUseCase,
        report_comment_use_case: ReportCommentUseCase,
        thread_settings: ThreadSettings,
    ) -> None:
        self.post_id = post_id
        self.viewer = viewer
        self.comment_service = comment_service
        self.like_service = like_service
        self.add_comment_use_case = add_comment_use_case
        self.add_reply_use_case = add_reply_use_case
        self.edit_comment_use_case = edit_comment_use_case
        self.delete_comment_use_case = delete_comment_use_case
        self.toggle_like_use_case = toggle_like_use_case
        self.report_comment_use_case = report_comment_use_case
        self.thread_settings = thread_settings

        self.sort_mode: SortMode = thread_settings.default_sort

        # Insertion ordered; the builder keeps this order within sibling groups
        self._comments: dict[CommentId, Comment] = {}
        self._likes: dict[CommentId, LikeState] = {}
        self._pending: set[CommentId] = set()
        self._in_flight: set[CommentId] = set()
        self._collapsed: set[CommentId] = set()

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def comments(self) -> list[Comment]:
        """Flat comment rows, including tombstones and pending placeholders."""
        return list(self._comments.values())

    @property
    def forest(self) -> list[CommentNode]:
        """Sorted comment forest."""
        return sort_forest(build_forest(self.comments, self._likes), self.sort_mode)

    def view(self) -> list[DisplayNode]:
        """Display forest with the depth cap, collapse state and placeholders."""
        return build_display_forest(
            self.forest,
            max_depth=self.thread_settings.max_depth,
            preview_length=self.thread_settings.preview_length,
            collapsed=frozenset(self._collapsed),
            pending=frozenset(self._pending),
        )

    def like_state(self, comment_id: CommentId) -> LikeState:
        return self._likes.get(comment_id, LikeState())

    def is_pending(self, comment_id: CommentId) -> bool:
        return comment_id in self._pending

    def state_of(self, comment_id: CommentId) -> OperationState:
        """Whether an operation on the comment is currently submitting."""
        if comment_id in self._in_flight:
            return OperationState.SUBMITTING
        return OperationState.IDLE

    def toggle_collapsed(self, comment_id: CommentId) -> bool:
        """Collapse or expand a comment's replies; returns the new state."""
        if comment_id in self._collapsed:
            self._collapsed.discard(comment_id)
            return False
        self._collapsed.add(comment_id)
        return True

    def set_sort_mode(self, mode: SortMode | str) -> None:
        try:
            self.sort_mode = SortMode(mode)
        except ValueError:
            allowed = ", ".join(m.value for m in SortMode)
            raise ValidationError(f"Unknown sort mode '{mode}' (allowed: {allowed})")

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def refresh(self) -> OperationResult[list[CommentNode]]:
        """Re-fetch rows and like state from the backend.

        Optimistic placeholders still awaiting confirmation are kept.
        """

        async def load() -> tuple[list[Comment], dict[CommentId, LikeState]]:
            comments = await self.comment_service.fetch_comments(self.post_id)
            likes = await self.like_service.fetch_like_state(
                [c.id for c in comments], self.viewer.user_id
            )
            return comments, likes

        with logfire.span("thread_session.refresh", post_id=str(self.post_id)):
            try:
                comments, likes = await self._with_timeout("refresh", load())
            except DomainError as error:
                logfire.warn(
                    "Thread refresh failed",
                    post_id=str(self.post_id),
                    kind=error.kind.value,
                )
                return OperationResult.rolled_back(error)

            placeholders = [self._comments[cid] for cid in self._pending]
            self._comments = {c.id: c for c in comments}
            self._likes = dict(likes)
            for placeholder in placeholders:
                self._comments[placeholder.id] = placeholder

            logfire.info(
                "Thread loaded", post_id=str(self.post_id), count=len(comments)
            )
            return OperationResult.committed(self.forest)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def add_comment(self, content: str) -> OperationResult[Comment]:
        """Post a root comment, shown as pending until confirmed."""
        try:
            author_id = require_user(self.viewer.user_id, "comment")
            text = normalize_content(content, self.thread_settings.max_content_length)
        except DomainError as error:
            return OperationResult.rejected(error)

        placeholder = self._placeholder(author_id, None, text)
        return await self._submit_new(
            "add_comment",
            placeholder,
            lambda: self.add_comment_use_case.execute(
                AddCommentRequest(
                    post_id=str(self.post_id),
                    author_id=str(author_id),
                    content=text,
                )
            ),
        )

    async def add_reply(
        self, parent_id: CommentId, content: str
    ) -> OperationResult[Comment]:
        """Reply to a comment at any depth, shown as pending until confirmed."""
        try:
            author_id = require_user(self.viewer.user_id, "reply")
            text = normalize_content(content, self.thread_settings.max_content_length)
            if parent_id in self._pending:
                # Parent has no server id yet
                raise OperationInFlightError(str(parent_id))
            parent = self._comments.get(parent_id)
            if parent is not None and parent.is_deleted:
                raise NotFoundError("Comment", str(parent_id))
            if parent is not None and parent.post_id != self.post_id:
                raise ValidationError("Parent comment does not belong to this post")
        except DomainError as error:
            return OperationResult.rejected(error)

        placeholder = self._placeholder(author_id, parent_id, text)
        return await self._submit_new(
            "add_reply",
            placeholder,
            lambda: self.add_reply_use_case.execute(
                AddReplyRequest(
                    parent_id=str(parent_id),
                    author_id=str(author_id),
                    content=text,
                    post_id=str(self.post_id),
                )
            ),
        )

    async def edit_comment(
        self, comment_id: CommentId, content: str
    ) -> OperationResult[Comment]:
        """Replace the content of the viewer's own comment."""
        try:
            self._ensure_idle(comment_id)
            comment = self._live_comment(comment_id)
            editor_id = ensure_can_edit(comment, self.viewer.user_id)
            text = normalize_content(content, self.thread_settings.max_content_length)
        except DomainError as error:
            return OperationResult.rejected(error)

        snapshot = self._snapshot(comment_id)
        self._comments[comment_id] = comment.model_copy(
            update={"content": text, "updated_at": datetime.now(timezone.utc)}
        )

        async def call() -> Comment:
            response = await self.edit_comment_use_case.execute(
                EditCommentRequest(
                    comment_id=str(comment_id), editor_id=str(editor_id), content=text
                )
            )
            return response.comment

        return await self._submit("edit_comment", snapshot, call, self._store_comment)

    async def delete_comment(self, comment_id: CommentId) -> OperationResult[Comment]:
        """Tombstone a comment; its replies stay in the thread."""
        try:
            self._ensure_idle(comment_id)
            comment = self._live_comment(comment_id)
            requester_id = ensure_can_delete(
                comment, self.viewer.user_id, self.viewer.role
            )
        except DomainError as error:
            return OperationResult.rejected(error)

        snapshot = self._snapshot(comment_id)
        self._comments[comment_id] = comment.model_copy(
            update={"deleted_at": datetime.now(timezone.utc)}
        )

        async def call() -> Comment:
            response = await self.delete_comment_use_case.execute(
                DeleteCommentRequest(
                    comment_id=str(comment_id),
                    requester_id=str(requester_id),
                    requester_role=self.viewer.role,
                )
            )
            return response.comment

        return await self._submit(
            "delete_comment", snapshot, call, self._store_comment
        )

    async def toggle_like(self, comment_id: CommentId) -> OperationResult[LikeState]:
        """Flip the viewer's like; the count moves by one immediately."""
        try:
            self._ensure_idle(comment_id)
            user_id = require_user(self.viewer.user_id, "like comments")
            self._live_comment(comment_id)
        except DomainError as error:
            return OperationResult.rejected(error)

        snapshot = self._snapshot(comment_id)
        current = self.like_state(comment_id)
        delta = -1 if current.user_has_liked else 1
        self._likes[comment_id] = LikeState(
            count=max(0, current.count + delta),
            user_has_liked=not current.user_has_liked,
        )

        async def call() -> LikeState:
            response = await self.toggle_like_use_case.execute(
                ToggleLikeRequest(comment_id=str(comment_id), user_id=str(user_id))
            )
            return LikeState(
                count=response.likes_count, user_has_liked=response.user_has_liked
            )

        def commit(state: LikeState) -> None:
            self._likes[comment_id] = state

        return await self._submit("toggle_like", snapshot, call, commit)

    async def report_comment(
        self,
        comment_id: CommentId,
        reason: ReportReason | str,
        description: Optional[str] = None,
    ) -> OperationResult[CommentReport]:
        """Report a comment for moderation. The thread itself is not changed."""
        try:
            self._ensure_idle(comment_id)
            reporter_id = require_user(self.viewer.user_id, "report comments")
            parsed_reason = parse_reason(reason)
            normalize_description(
                description, self.thread_settings.max_report_description_length
            )
            self._live_comment(comment_id)
        except DomainError as error:
            return OperationResult.rejected(error)

        snapshot = self._snapshot(comment_id)

        async def call() -> CommentReport:
            response = await self.report_comment_use_case.execute(
                ReportCommentRequest(
                    comment_id=str(comment_id),
                    reporter_id=str(reporter_id),
                    reason=parsed_reason.value,
                    description=description,
                )
            )
            return response.report

        return await self._submit(
            "report_comment", snapshot, call, lambda report: None
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_idle(self, comment_id: CommentId) -> None:
        if comment_id in self._in_flight or comment_id in self._pending:
            raise OperationInFlightError(str(comment_id))

    def _live_comment(self, comment_id: CommentId) -> Comment:
        comment = self._comments.get(comment_id)
        if comment is None or comment.is_deleted:
            raise NotFoundError("Comment", str(comment_id))
        return comment

    def _placeholder(
        self, author_id: UserId, parent_id: Optional[CommentId], text: str
    ) -> Comment:
        now = datetime.now(timezone.utc)
        return Comment(
            id=CommentId(uuid4()),
            post_id=self.post_id,
            author_id=author_id,
            parent_comment_id=parent_id,
            content=text,
            created_at=now,
            updated_at=now,
        )

    def _snapshot(self, comment_id: CommentId) -> _Snapshot:
        return _Snapshot(
            comment_id=comment_id,
            comment=self._comments.get(comment_id),
            like=self._likes.get(comment_id),
            pending=comment_id in self._pending,
        )

    def _restore(self, snapshot: _Snapshot) -> None:
        cid = snapshot.comment_id
        if snapshot.comment is None:
            self._comments.pop(cid, None)
        else:
            self._comments[cid] = snapshot.comment
        if snapshot.like is None:
            self._likes.pop(cid, None)
        else:
            self._likes[cid] = snapshot.like
        if snapshot.pending:
            self._pending.add(cid)
        else:
            self._pending.discard(cid)

    def _store_comment(self, comment: Comment) -> None:
        self._comments[comment.id] = comment

    async def _submit_new(
        self,
        operation: str,
        placeholder: Comment,
        execute: Callable[[], Awaitable[object]],
    ) -> OperationResult[Comment]:
        """Insert a pending placeholder and swap it for the stored comment."""
        temp_id = placeholder.id
        snapshot = self._snapshot(temp_id)
        self._comments[temp_id] = placeholder
        self._pending.add(temp_id)

        async def call() -> Comment:
            response = await execute()
            return response.comment  # type: ignore[attr-defined]

        def commit(comment: Comment) -> None:
            # Keep the placeholder's position in the flat rows
            self._comments = {
                (comment.id if cid == temp_id else cid): (
                    comment if cid == temp_id else row
                )
                for cid, row in self._comments.items()
            }
            self._pending.discard(temp_id)
            self._likes.setdefault(comment.id, LikeState())

        return await self._submit(operation, snapshot, call, commit)

    async def _submit(
        self,
        operation: str,
        snapshot: _Snapshot,
        call: Callable[[], Awaitable[T]],
        commit: Callable[[T], None],
    ) -> OperationResult[T]:
        """Run one backend call; commit on success, restore the snapshot otherwise."""
        comment_id = snapshot.comment_id
        self._in_flight.add(comment_id)
        try:
            with logfire.span(
                "thread_session.{operation}",
                operation=operation,
                post_id=str(self.post_id),
                comment_id=str(comment_id),
            ):
                try:
                    value = await self._with_timeout(operation, call())
                except DomainError as error:
                    self._restore(snapshot)
                    logfire.warn(
                        "Operation rolled back",
                        operation=operation,
                        comment_id=str(comment_id),
                        kind=error.kind.value,
                    )
                    if isinstance(error, NotFoundError):
                        await self.refresh()
                    return OperationResult.rolled_back(error)

                commit(value)
                logfire.info(
                    "Operation committed",
                    operation=operation,
                    comment_id=str(comment_id),
                )
                return OperationResult.committed(value)
        finally:
            self._in_flight.discard(comment_id)

    async def _with_timeout(self, operation: str, awaitable: Awaitable[T]) -> T:
        """Await a backend call with the request timeout.

        Raises:
            RequestTimeoutError: If the call does not finish in time
            BackendError: For any failure that is not a domain error
        """
        timeout = self.thread_settings.request_timeout_seconds
        try:
            return await asyncio.wait_for(awaitable, timeout=timeout)
        except asyncio.TimeoutError:
            raise RequestTimeoutError(operation, timeout) from None
        except DomainError:
            raise
        except Exception as exc:
            logfire.error(
                "Backend call failed",
                operation=operation,
                post_id=str(self.post_id),
                error=str(exc),
            )
            raise BackendError(f"{operation} failed: {exc}") from exc

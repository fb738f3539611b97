"""
DevConnector Backend - Aggregate Mutation Engine
================================================

What:  Pure rules for adding, replacing and removing the nested sub-entities of
       a Profile (experience, education) or a Post (likes, comments).
How:   Every function takes the loaded aggregate plus the acting user id,
       checks ownership explicitly, validates, and assigns a NEW list to the
       sub-collection attribute. The input list is never mutated, so a failed
       call leaves the aggregate exactly as it was.
Who:   Called by ProfileService and PostService between load and persist.
       Nothing here touches a database session.

Identity rules:
    Sub-entity ids are opaque strings compared with `==`. A lookup that finds
    nothing raises NotFoundError before any list is rebuilt.

Ordering:
    Experience, education, likes and comments are newest-first: inserts go to
    index 0, replacements keep their position.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from app.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.models.user import new_id, utcnow

logger = logging.getLogger(__name__)

Entry = Dict[str, Any]

# (field, message) pairs checked in order, so errors come back in form order
EXPERIENCE_REQUIRED: Tuple[Tuple[str, str], ...] = (
    ("title", "Title is required"),
    ("company", "Company is required"),
    ("from", "From date is required"),
)
EXPERIENCE_FIELDS = ("title", "company", "location", "from", "to", "current", "description")

EDUCATION_REQUIRED: Tuple[Tuple[str, str], ...] = (
    ("school", "School is required"),
    ("degree", "Degree is required"),
    ("fieldofstudy", "Field of study is required"),
    ("from", "From date is required"),
)
EDUCATION_FIELDS = ("school", "degree", "fieldofstudy", "from", "to", "current", "description")


# ══════════════════════════════════════════════════════════════════════════
# Shared checks
# ══════════════════════════════════════════════════════════════════════════

def is_blank(value: Any) -> bool:
    """None, empty or whitespace-only strings count as missing."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_fields(data: Dict[str, Any], required: Iterable[Tuple[str, str]]) -> None:
    """
    Raise one ValidationError listing every missing required field.

    Raises:
        ValidationError: with `errors=[{"field", "message"}, ...]`
    """
    errors = [
        {"field": field, "message": message}
        for field, message in required
        if is_blank(data.get(field))
    ]
    if errors:
        raise ValidationError.from_fields(errors)


def ensure_owner(owner_id: str, acting_user_id: str, resource: str) -> None:
    """Explicit `owner == caller` check, independent of how the aggregate was loaded."""
    if owner_id != acting_user_id:
        logger.warning(
            "User %s denied mutation of %s owned by %s", acting_user_id, resource, owner_id
        )
        raise AuthorizationError(context={"resource": resource})


def find_index(entries: List[Entry], entry_id: str, resource: str, key: str = "id") -> int:
    """
    Position of the entry whose `key` equals `entry_id` exactly.

    Raises:
        NotFoundError: when no entry matches. There is no fallback index.
    """
    for index, entry in enumerate(entries):
        if entry.get(key) == entry_id:
            return index
    raise NotFoundError(resource=resource, resource_id=entry_id)


def _normalize(data: Dict[str, Any], fields: Iterable[str]) -> Entry:
    entry: Entry = {}
    for field in fields:
        value = data.get(field)
        if isinstance(value, (date, datetime)):
            value = value.isoformat()
        entry[field] = value
    entry["current"] = bool(entry.get("current"))
    return entry


# ══════════════════════════════════════════════════════════════════════════
# Profile sub-collections
# ══════════════════════════════════════════════════════════════════════════

def _add_entry(profile, collection: str, data: Dict[str, Any], acting_user_id: str,
               required, fields) -> Entry:
    ensure_owner(profile.user_id, acting_user_id, "profile")
    require_fields(data, required)

    existing: List[Entry] = list(getattr(profile, collection) or [])
    taken = {item.get("id") for item in existing}
    entry_id = new_id()
    while entry_id in taken:
        entry_id = new_id()

    entry = {"id": entry_id, **_normalize(data, fields)}
    setattr(profile, collection, [entry, *existing])
    logger.info("Added %s entry %s to profile of user %s", collection, entry_id, acting_user_id)
    return entry


def _replace_entry(profile, collection: str, entry_id: str, patch: Dict[str, Any],
                   acting_user_id: str, required, fields) -> Entry:
    ensure_owner(profile.user_id, acting_user_id, "profile")
    existing: List[Entry] = list(getattr(profile, collection) or [])
    index = find_index(existing, entry_id, resource=f"{collection} entry")
    require_fields(patch, required)

    # Whole replacement, not a merge: fields absent from the patch are cleared
    entry = {"id": entry_id, **_normalize(patch, fields)}
    existing[index] = entry
    setattr(profile, collection, existing)
    logger.info("Replaced %s entry %s on profile of user %s", collection, entry_id, acting_user_id)
    return entry


def _remove_entry(profile, collection: str, entry_id: str, acting_user_id: str) -> None:
    ensure_owner(profile.user_id, acting_user_id, "profile")
    existing: List[Entry] = list(getattr(profile, collection) or [])
    index = find_index(existing, entry_id, resource=f"{collection} entry")
    del existing[index]
    setattr(profile, collection, existing)
    logger.info("Removed %s entry %s from profile of user %s", collection, entry_id, acting_user_id)


def add_experience(profile, entry: Dict[str, Any], acting_user_id: str):
    """Insert a new experience entry at the front. Requires title, company, from."""
    _add_entry(profile, "experience", entry, acting_user_id, EXPERIENCE_REQUIRED, EXPERIENCE_FIELDS)
    return profile


def update_experience(profile, entry_id: str, patch: Dict[str, Any], acting_user_id: str):
    """Replace the experience entry `entry_id` wholly with `patch`, keeping id and position."""
    _replace_entry(
        profile, "experience", entry_id, patch, acting_user_id,
        EXPERIENCE_REQUIRED, EXPERIENCE_FIELDS,
    )
    return profile


def remove_experience(profile, entry_id: str, acting_user_id: str):
    _remove_entry(profile, "experience", entry_id, acting_user_id)
    return profile


def add_education(profile, entry: Dict[str, Any], acting_user_id: str):
    """Insert a new education entry at the front. Requires school, degree, fieldofstudy, from."""
    _add_entry(profile, "education", entry, acting_user_id, EDUCATION_REQUIRED, EDUCATION_FIELDS)
    return profile


def update_education(profile, entry_id: str, patch: Dict[str, Any], acting_user_id: str):
    _replace_entry(
        profile, "education", entry_id, patch, acting_user_id,
        EDUCATION_REQUIRED, EDUCATION_FIELDS,
    )
    return profile


def remove_education(profile, entry_id: str, acting_user_id: str):
    _remove_entry(profile, "education", entry_id, acting_user_id)
    return profile


# ══════════════════════════════════════════════════════════════════════════
# Post sub-collections
# ══════════════════════════════════════════════════════════════════════════

def toggle_like(post, acting_user_id: str) -> List[Entry]:
    """
    Like the post, or take the like back if the caller already liked it.

    Likes are keyed by user id, so a user holds at most one like per post.
    Two calls in a row restore the original collection.

    Returns:
        The resulting likes list.
    """
    likes: List[Entry] = list(post.likes or [])
    try:
        index = find_index(likes, acting_user_id, resource="like", key="user")
    except NotFoundError:
        likes.insert(0, {"user": acting_user_id})
        logger.info("User %s liked post %s", acting_user_id, post.id)
    else:
        del likes[index]
        logger.info("User %s unliked post %s", acting_user_id, post.id)
    post.likes = likes
    return likes


def add_comment(post, text: Optional[str], acting_user_id: str,
                name: Optional[str], avatar: Optional[str]) -> List[Entry]:
    """
    Prepend a comment carrying a snapshot of the commenter's name and avatar.

    Raises:
        ValidationError: when `text` is empty.

    Returns:
        The resulting comments list.
    """
    require_fields({"text": text}, (("text", "Text is required"),))

    comments: List[Entry] = list(post.comments or [])
    taken = {item.get("id") for item in comments}
    comment_id = new_id()
    while comment_id in taken:
        comment_id = new_id()

    comment = {
        "id": comment_id,
        "user": acting_user_id,
        "text": text,
        "name": name,
        "avatar": avatar,
        "date": utcnow().isoformat(),
    }
    post.comments = [comment, *comments]
    logger.info("User %s commented %s on post %s", acting_user_id, comment_id, post.id)
    return post.comments


def remove_comment(post, comment_id: str, acting_user_id: str):
    """
    Remove one comment. Only the comment's author may remove it.

    Raises:
        NotFoundError: no comment with that id ("Comment does not exist").
        AuthorizationError: the caller did not write the comment.
    """
    comments: List[Entry] = list(post.comments or [])
    try:
        index = find_index(comments, comment_id, resource="comment")
    except NotFoundError as e:
        raise NotFoundError(
            resource="comment",
            resource_id=comment_id,
            message="Comment does not exist",
        ) from e

    ensure_owner(comments[index].get("user"), acting_user_id, "comment")
    del comments[index]
    post.comments = comments
    logger.info("User %s removed comment %s from post %s", acting_user_id, comment_id, post.id)
    return post


def ensure_can_delete_post(post, acting_user_id: str) -> None:
    """Only the creator may delete a post."""
    ensure_owner(post.user_id, acting_user_id, "post")

"""
DevConnector Backend - Mutation Engine Unit Tests
=================================================

What:  Tests for the pure add/replace/remove rules on profile and post
       sub-collections.
How:   Transient ORM instances, no session, no HTTP.

What we test:
    ✅ New experience/education entries land at index 0 with a fresh id
    ✅ Replace keeps id and position; unknown id never touches the collection
    ✅ Remove by id removes exactly that entry; unknown id raises NotFoundError
    ✅ Like toggling round-trips; one like per user
    ✅ Comments: empty text rejected, only the author may remove
    ✅ Only the creator may delete a post
"""

from datetime import date

import pytest

from app.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.services import mutations


def experience(entry_id, title="Engineer"):
    return {
        "id": entry_id, "title": title, "company": "Acme", "location": None,
        "from": "2020-01-01", "to": None, "current": True, "description": None,
    }


def education(entry_id, school="MIT"):
    return {
        "id": entry_id, "school": school, "degree": "BSc", "fieldofstudy": "CS",
        "from": "2012-09-01", "to": "2016-06-01", "current": False, "description": None,
    }


VALID_EXPERIENCE = {"title": "Senior Dev", "company": "Globex", "from": date(2021, 3, 1)}
VALID_EDUCATION = {
    "school": "Stanford", "degree": "MSc", "fieldofstudy": "AI", "from": date(2017, 9, 1),
}


class TestExperience:

    def test_add_inserts_at_front_with_fresh_id(self, make_user, make_profile):
        user = make_user()
        profile = make_profile(user, experience=[experience("1")])

        mutations.add_experience(profile, VALID_EXPERIENCE, user.id)

        assert [e["title"] for e in profile.experience] == ["Senior Dev", "Engineer"]
        new_entry = profile.experience[0]
        assert new_entry["id"] not in {"1"}
        assert new_entry["from"] == "2021-03-01"
        assert new_entry["current"] is False
        assert profile.experience[1]["id"] == "1"

    def test_add_ids_are_unique_across_entries(self, make_user, make_profile):
        user = make_user()
        profile = make_profile(user)
        for _ in range(5):
            mutations.add_experience(profile, VALID_EXPERIENCE, user.id)

        ids = [e["id"] for e in profile.experience]
        assert len(set(ids)) == 5

    def test_add_missing_required_fields_lists_every_field(self, make_user, make_profile):
        user = make_user()
        profile = make_profile(user, experience=[experience("1")])
        before = list(profile.experience)

        with pytest.raises(ValidationError) as exc_info:
            mutations.add_experience(profile, {"title": "  ", "location": "Remote"}, user.id)

        fields = [e["field"] for e in exc_info.value.errors]
        assert fields == ["title", "company", "from"]
        assert exc_info.value.message == "Title is required"
        assert profile.experience == before

    def test_add_by_non_owner_rejected(self, make_user, make_profile):
        owner, intruder = make_user(), make_user()
        profile = make_profile(owner)

        with pytest.raises(AuthorizationError):
            mutations.add_experience(profile, VALID_EXPERIENCE, intruder.id)
        assert profile.experience == []

    def test_update_replaces_whole_entry_in_place(self, make_user, make_profile):
        user = make_user()
        profile = make_profile(
            user, experience=[experience("a", "First"), experience("b", "Second")]
        )

        mutations.update_experience(
            profile, "b", {"title": "Lead", "company": "Initech", "from": "2019-05-01"}, user.id
        )

        assert [e["id"] for e in profile.experience] == ["a", "b"]
        replaced = profile.experience[1]
        assert replaced["title"] == "Lead"
        assert replaced["company"] == "Initech"
        # Whole replacement: fields missing from the patch are cleared
        assert replaced["current"] is False
        assert replaced["location"] is None

    def test_update_unknown_id_never_touches_last_entry(self, make_user, make_profile):
        user = make_user()
        entries = [experience("a", "First"), experience("b", "Last")]
        profile = make_profile(user, experience=entries)

        with pytest.raises(NotFoundError):
            mutations.update_experience(profile, "missing", dict(VALID_EXPERIENCE), user.id)

        assert profile.experience == entries

    def test_remove_by_id(self, make_user, make_profile):
        user = make_user()
        profile = make_profile(
            user, experience=[experience("a"), experience("b"), experience("c")]
        )

        mutations.remove_experience(profile, "b", user.id)

        assert [e["id"] for e in profile.experience] == ["a", "c"]

    def test_remove_unknown_id_leaves_collection_unchanged(self, make_user, make_profile):
        user = make_user()
        entries = [experience("a"), experience("b")]
        profile = make_profile(user, experience=entries)

        with pytest.raises(NotFoundError):
            mutations.remove_experience(profile, "zzz", user.id)

        assert [e["id"] for e in profile.experience] == ["a", "b"]

    def test_ids_compared_as_exact_strings(self, make_user, make_profile):
        user = make_user()
        profile = make_profile(user, experience=[experience("10"), experience("1")])

        mutations.remove_experience(profile, "1", user.id)

        assert [e["id"] for e in profile.experience] == ["10"]


class TestEducation:

    def test_add_inserts_at_front(self, make_user, make_profile):
        user = make_user()
        profile = make_profile(user, education=[education("1")])

        mutations.add_education(profile, VALID_EDUCATION, user.id)

        assert [e["school"] for e in profile.education] == ["Stanford", "MIT"]
        assert profile.education[0]["id"] != "1"

    def test_add_requires_field_of_study(self, make_user, make_profile):
        user = make_user()
        profile = make_profile(user)
        body = dict(VALID_EDUCATION, fieldofstudy="")

        with pytest.raises(ValidationError, match="Field of study is required"):
            mutations.add_education(profile, body, user.id)
        assert profile.education == []

    def test_update_and_remove(self, make_user, make_profile):
        user = make_user()
        profile = make_profile(user, education=[education("x"), education("y")])

        mutations.update_education(profile, "x", VALID_EDUCATION, user.id)
        assert profile.education[0] == {
            "id": "x", "school": "Stanford", "degree": "MSc", "fieldofstudy": "AI",
            "from": "2017-09-01", "to": None, "current": False, "description": None,
        }

        mutations.remove_education(profile, "y", user.id)
        assert [e["id"] for e in profile.education] == ["x"]

    def test_remove_unknown_id_raises(self, make_user, make_profile):
        user = make_user()
        profile = make_profile(user, education=[education("x")])

        with pytest.raises(NotFoundError):
            mutations.remove_education(profile, "nope", user.id)
        assert len(profile.education) == 1


class TestLikes:

    def test_toggle_adds_then_removes(self, make_user, make_post):
        author, fan = make_user(), make_user()
        post = make_post(author)

        assert mutations.toggle_like(post, fan.id) == [{"user": fan.id}]
        assert mutations.toggle_like(post, fan.id) == []
        assert post.likes == []

    def test_toggle_round_trip_restores_original(self, make_user, make_post):
        author, other, fan = make_user(), make_user(), make_user()
        original = [{"user": other.id}, {"user": author.id}]
        post = make_post(author, likes=original)

        mutations.toggle_like(post, fan.id)
        assert post.likes[0] == {"user": fan.id}

        mutations.toggle_like(post, fan.id)
        assert post.likes == original

    def test_toggle_only_removes_callers_like(self, make_user, make_post):
        author, other = make_user(), make_user()
        post = make_post(author, likes=[{"user": other.id}, {"user": author.id}])

        mutations.toggle_like(post, author.id)

        assert post.likes == [{"user": other.id}]


class TestComments:

    def test_add_comment_prepends_with_snapshot(self, make_user, make_post):
        author, commenter = make_user(), make_user(name="Bob")
        post = make_post(author, comments=[{"id": "old", "user": author.id, "text": "first"}])

        comments = mutations.add_comment(post, "Nice!", commenter.id, "Bob", "//avatar")

        assert comments[0]["text"] == "Nice!"
        assert comments[0]["user"] == commenter.id
        assert comments[0]["name"] == "Bob"
        assert comments[0]["avatar"] == "//avatar"
        assert comments[0]["id"] != "old"
        assert comments[0]["date"]
        assert comments[1]["id"] == "old"

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_comment_rejected(self, make_user, make_post, text):
        author = make_user()
        post = make_post(author)

        with pytest.raises(ValidationError, match="Text is required"):
            mutations.add_comment(post, text, author.id, author.name, author.avatar)
        assert post.comments == []

    def test_remove_own_comment(self, make_user, make_post):
        author, commenter = make_user(), make_user()
        post = make_post(author, comments=[
            {"id": "c1", "user": commenter.id, "text": "one"},
            {"id": "c2", "user": author.id, "text": "two"},
        ])

        mutations.remove_comment(post, "c1", commenter.id)

        assert [c["id"] for c in post.comments] == ["c2"]

    def test_remove_comment_by_non_author_rejected(self, make_user, make_post):
        author, commenter = make_user(), make_user()
        comments = [{"id": "c1", "user": commenter.id, "text": "one"}]
        post = make_post(author, comments=comments)

        # Even the post's author cannot remove someone else's comment
        with pytest.raises(AuthorizationError):
            mutations.remove_comment(post, "c1", author.id)
        assert post.comments == comments

    def test_remove_missing_comment(self, make_user, make_post):
        author = make_user()
        post = make_post(author)

        with pytest.raises(NotFoundError, match="Comment does not exist"):
            mutations.remove_comment(post, "ghost", author.id)


class TestDeletePost:

    def test_owner_may_delete(self, make_user, make_post):
        author = make_user()
        mutations.ensure_can_delete_post(make_post(author), author.id)

    def test_non_owner_rejected(self, make_user, make_post):
        author, other = make_user(), make_user()
        with pytest.raises(AuthorizationError, match="User not authorized"):
            mutations.ensure_can_delete_post(make_post(author), other.id)

"""Follower, following and pending-request projections."""
from datetime import UTC, datetime, timedelta

import pytest

from followgraph.models import AccountType, FollowStatus
from followgraph.services import graph
from followgraph.services.follows import apply_action, decide
from followgraph.utils.errors import NotFoundError, ValidationError
from followgraph.utils.pagination import PageRequest


def test_public_follow_shows_up_on_both_sides(db_session, make_user):
    u1 = make_user("one", profile_pic="one.png")
    u2 = make_user("two")

    apply_action(db_session, u1.id, u2.id, "follow", is_request=False)

    following = graph.list_following(db_session, u1.id, PageRequest(page=1, limit=3))
    followers = graph.list_followers(db_session, u2.id, PageRequest(page=1, limit=3))
    assert [(s.id, s.username) for s in following] == [(u2.id, "two")]
    assert [(s.id, s.username, s.profile_pic) for s in followers] == [(u1.id, "one", "one.png")]


def test_private_request_lands_in_target_inbox(db_session, make_user):
    u1 = make_user("one")
    u2 = make_user("two")
    u3 = make_user("three", account_type=AccountType.PRIVATE)

    apply_action(db_session, u1.id, u3.id, "follow", is_request=True)

    [request] = graph.list_pending_requests(db_session, u3.id)
    assert request.requester_id == u1.id
    assert request.username == "one"
    assert graph.list_followers(db_session, u3.id, PageRequest(page=1, limit=3)) == []
    with pytest.raises(NotFoundError):
        decide(db_session, request.edge_id, u2.id, "approve")


def test_followers_second_page(db_session, make_user, make_edge):
    target = make_user("target")
    followers = [make_user(f"f{i}") for i in range(4)]
    for follower in followers:
        make_edge(follower, target, FollowStatus.ACCEPTED)

    page_two = graph.list_followers(db_session, target.id, PageRequest(page=2, limit=3))

    assert [s.id for s in page_two] == [max(f.id for f in followers)]


def test_listings_only_include_accepted_edges_in_id_order(db_session, make_user, make_edge):
    owner = make_user("owner")
    a, b, c, d = (make_user(n) for n in "abcd")
    make_edge(owner, c, FollowStatus.ACCEPTED)
    make_edge(owner, a, FollowStatus.ACCEPTED)
    make_edge(owner, b, FollowStatus.PENDING)
    make_edge(owner, d, FollowStatus.REJECTED)

    following = graph.list_following(db_session, owner.id, PageRequest(page=1, limit=10))

    assert [s.id for s in following] == sorted([a.id, c.id])


def test_pending_requests_oldest_first(db_session, make_user, make_edge):
    owner = make_user("owner", account_type=AccountType.PRIVATE)
    early, late, middle = make_user("early"), make_user("late"), make_user("middle")
    base = datetime(2024, 5, 1, tzinfo=UTC)
    make_edge(late, owner, FollowStatus.PENDING, created_at=base + timedelta(hours=2))
    make_edge(early, owner, FollowStatus.PENDING, created_at=base)
    make_edge(middle, owner, FollowStatus.PENDING, created_at=base + timedelta(hours=1))
    make_edge(make_user("done"), owner, FollowStatus.ACCEPTED, created_at=base - timedelta(days=1))

    requests = graph.list_pending_requests(db_session, owner.id)

    assert [r.requester_id for r in requests] == [early.id, middle.id, late.id]


def test_relationship_summary_partitions_outgoing_edges(db_session, make_user, make_edge):
    owner = make_user("owner")
    a, b, c = make_user("a"), make_user("b"), make_user("c")
    make_edge(owner, a, FollowStatus.ACCEPTED)
    make_edge(owner, b, FollowStatus.PENDING)
    make_edge(owner, c, FollowStatus.REJECTED)
    make_edge(a, owner, FollowStatus.ACCEPTED)

    summary = graph.relationship_summary(db_session, owner.id)

    assert summary.following == [a.id]
    assert summary.pending_requests == [b.id]


def test_relationship_counts_ignore_non_accepted(db_session, make_user, make_edge):
    owner = make_user("owner")
    a, b, c = make_user("a"), make_user("b"), make_user("c")
    make_edge(a, owner, FollowStatus.ACCEPTED)
    make_edge(b, owner, FollowStatus.PENDING)
    make_edge(owner, c, FollowStatus.ACCEPTED)

    counts = graph.relationship_counts(db_session, owner.id)

    assert (counts.followers_count, counts.following_count) == (1, 1)


@pytest.mark.anyio
async def test_list_endpoints_default_invalid_pagination(client, make_user, make_edge, headers_for):
    target = make_user("target")
    for i in range(4):
        make_edge(make_user(f"f{i}"), target, FollowStatus.ACCEPTED)

    resp = await client.get(
        f"/followers/list/{target.id}", params={"page": "abc", "limit": "0"}, headers=headers_for(target)
    )

    assert resp.status_code == 200
    body = resp.json()
    assert (body["page"], body["limit"]) == (1, 3)
    assert len(body["followers"]) == 3


@pytest.mark.anyio
async def test_following_endpoints(client, make_user, make_edge, headers_for):
    owner = make_user("owner")
    a, b = make_user("a"), make_user("b")
    make_edge(owner, a, FollowStatus.ACCEPTED)
    make_edge(owner, b, FollowStatus.PENDING)
    headers = headers_for(owner)

    listing = await client.get(f"/following/list/{owner.id}", params={"page": 1, "limit": 5}, headers=headers)
    summary = await client.get(f"/following/{owner.id}", headers=headers)

    assert listing.status_code == 200
    assert listing.json() == {
        "page": 1,
        "limit": 5,
        "following": [{"id": a.id, "username": "a", "profile_pic": None}],
    }
    assert summary.json() == {"following": [a.id], "pending_requests": [b.id]}


@pytest.mark.anyio
async def test_pending_inbox_is_private_to_its_owner(client, make_user, make_edge, headers_for):
    owner = make_user("owner", account_type=AccountType.PRIVATE)
    requester = make_user("requester")
    edge = make_edge(requester, owner, FollowStatus.PENDING)

    own = await client.get(f"/followreq/{owner.id}", headers=headers_for(owner))
    other = await client.get(f"/followreq/{owner.id}", headers=headers_for(requester))

    assert own.status_code == 200
    [item] = own.json()["pending_requests"]
    assert item["edge_id"] == edge.id
    assert item["requester_id"] == requester.id
    assert item["username"] == "requester"
    assert other.status_code == 404


@pytest.mark.parametrize("user_id", [0, -4])
def test_graph_queries_reject_non_positive_ids(db_session, user_id):
    with pytest.raises(ValidationError):
        graph.list_following(db_session, user_id, PageRequest(page=1, limit=3))
    with pytest.raises(ValidationError):
        graph.list_followers(db_session, user_id, PageRequest(page=1, limit=3))
    with pytest.raises(ValidationError):
        graph.relationship_summary(db_session, user_id)


@pytest.mark.anyio
@pytest.mark.parametrize("path", ["/followers/list/-4", "/following/list/0", "/following/-1"])
async def test_list_endpoints_reject_invalid_user_id(client, make_user, headers_for, path):
    caller = make_user("caller")

    resp = await client.get(path, headers=headers_for(caller))

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"

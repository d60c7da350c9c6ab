"""Route tests against an app wired with in-memory stores."""

import asyncio
from datetime import date, timedelta
from uuid import uuid4

import pytest
from dishka import Provider, Scope, make_async_container, provide
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI
from fastapi.testclient import TestClient

from club.domain.error import TransientStoreError
from club.domain.repository import (
    EventRepository,
    InvitationRepository,
    SubgroupRepository,
)
from club.domain.value import CancelScope, RepeatType
from club.interface.api.routes import calendar, events, health, invitations
from club.persistence.repository.inmemory import (
    InMemoryEventRepository,
    InMemoryInvitationRepository,
    InMemorySubgroupRepository,
)
from club.util.di import (
    ProdAdapterProvider,
    ProdApplicationProvider,
    ProdConfigProvider,
    ProdDomainProvider,
)
from tests.conftest import make_event, make_rule


class UnavailableEventRepository(InMemoryEventRepository):
    async def find_by_id(self, event_id):
        raise TransientStoreError("connection refused")


class SharedStoreProvider(Provider):
    """Serves the same repositories to every request so tests can seed them."""

    scope = Scope.APP

    def __init__(self, event_repository: EventRepository) -> None:
        super().__init__()
        self.event_repository = event_repository
        self.invitation_repository = InMemoryInvitationRepository()
        self.subgroup_repository = InMemorySubgroupRepository()

    @provide
    def get_event_repository(self) -> EventRepository:
        return self.event_repository

    @provide
    def get_invitation_repository(self) -> InvitationRepository:
        return self.invitation_repository

    @provide
    def get_subgroup_repository(self) -> SubgroupRepository:
        return self.subgroup_repository


def _build_app(event_repository: EventRepository) -> FastAPI:
    app = FastAPI()
    container = make_async_container(
        ProdConfigProvider(),
        ProdDomainProvider(),
        ProdApplicationProvider(),
        ProdAdapterProvider(),
        SharedStoreProvider(event_repository),
        FastapiProvider(),
    )
    setup_dishka(container, app)
    for module in (health, calendar, events, invitations):
        app.include_router(module.router)
    return app


@pytest.fixture
def event_repository() -> InMemoryEventRepository:
    return InMemoryEventRepository()


@pytest.fixture
def client(event_repository):
    """Create test client."""
    return TestClient(_build_app(event_repository))


def _seed(repo: InMemoryEventRepository, event):
    return asyncio.run(repo.save(event))


class TestHealth:
    def test_reports_healthy(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCalendar:
    def test_month_view(self, client, event_repository, club_id):
        _seed(
            event_repository,
            make_event(make_rule(date(2024, 6, 3), RepeatType.WEEKLY), club_id=club_id),
        )

        response = client.get(f"/clubs/{club_id}/calendar", params={"year": 2024, "month": 6})

        assert response.status_code == 200
        days = response.json()["days"]
        assert [d["day"] for d in days] == [
            "2024-06-03",
            "2024-06-10",
            "2024-06-17",
            "2024-06-24",
        ]
        assert days[0]["occurrences"][0]["title"] == "Training"

    def test_last_month_of_calendar(self, client, event_repository, club_id):
        _seed(
            event_repository,
            make_event(make_rule(date(9999, 12, 1), RepeatType.WEEKLY), club_id=club_id),
        )

        response = client.get(f"/clubs/{club_id}/calendar", params={"year": 9999, "month": 12})

        assert response.status_code == 200
        assert response.json()["days"][-1]["day"] == "9999-12-29"

    def test_invalid_month_rejected(self, client, club_id):
        response = client.get(f"/clubs/{club_id}/calendar", params={"year": 2024, "month": 13})

        assert response.status_code == 422


class TestEvents:
    def test_next_occurrence(self, client, event_repository):
        event = _seed(
            event_repository, make_event(make_rule(date(2024, 1, 31), RepeatType.MONTHLY))
        )

        response = client.get(
            f"/events/{event.id}/next-occurrence", params={"after": "2024-02-01"}
        )

        assert response.status_code == 200
        assert response.json()["next_occurrence"] == "2024-02-29"

    def test_next_occurrence_unknown_event(self, client):
        response = client.get(f"/events/{uuid4()}/next-occurrence")

        assert response.status_code == 404

    def test_cancel_future_occurrences(self, client, event_repository):
        event = _seed(
            event_repository, make_event(make_rule(date(2024, 6, 3), RepeatType.WEEKLY))
        )

        response = client.post(
            f"/events/{event.id}/occurrences/2024-06-17/cancel",
            params={"scope": CancelScope.FUTURE.value},
        )

        assert response.status_code == 200
        assert response.json()["end_date"] == "2024-06-16"

    def test_cancel_single_event_rejected(self, client, event_repository):
        event = _seed(
            event_repository, make_event(make_rule(date(2024, 6, 3), RepeatType.NONE))
        )

        response = client.post(f"/events/{event.id}/occurrences/2024-06-03/cancel")

        assert response.status_code == 422


class TestInvitations:
    def test_sync_creates_invitations(self, client, event_repository):
        event = _seed(
            event_repository, make_event(make_rule(date.today(), RepeatType.WEEKLY))
        )
        user_id = str(uuid4())

        response = client.post(
            f"/events/{event.id}/invitations/sync", json={"user_ids": [user_id]}
        )

        assert response.status_code == 200
        data = response.json()
        # Today through four weeks ahead, both ends inclusive
        assert data["created_count"] == 5
        assert data["users"][0]["created"][0] == date.today().isoformat()
        assert data["window_end"] == (date.today() + timedelta(weeks=4)).isoformat()

    def test_sync_without_body(self, client, event_repository):
        event = _seed(
            event_repository, make_event(make_rule(date.today(), RepeatType.WEEKLY))
        )

        response = client.post(f"/events/{event.id}/invitations/sync")

        assert response.status_code == 200
        assert response.json()["users"] == []

    def test_store_outage_is_retryable(self):
        client = TestClient(_build_app(UnavailableEventRepository()))

        response = client.post(f"/events/{uuid4()}/invitations/sync")

        assert response.status_code == 503
        assert response.headers["Retry-After"] == "5"

import pytest

from zemiguard.config import Settings
from zemiguard.core.gateway import DecisionRequest, Gateway
from zemiguard.core.subject import Subject

from factories import IDS, seed_world


@pytest.fixture
def graph():
    return seed_world()


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def gateway(graph, settings):
    return Gateway(graph, settings=settings)


@pytest.fixture
def subject_for(graph):
    """Subject of a seeded user, read from the graph at call time"""
    def _subject_for(key):
        return Subject.from_user(graph.get_user(IDS[key]))
    return _subject_for


@pytest.fixture
def decide(gateway, subject_for):
    """decide("owner1", "select", "chat", before={...}) -> Decision"""
    def _decide(actor, operation, resource_type, before=None, after=None, changed_fields=None):
        subject = actor if isinstance(actor, Subject) else subject_for(actor)
        return gateway.authorize(DecisionRequest(
            subject=subject,
            operation=operation,
            resource_type=resource_type,
            before=before,
            after=after,
            changed_fields=changed_fields,
        ))
    return _decide

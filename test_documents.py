import pytest

from clubportal import documents as collections
from clubportal.documents import DocumentClient
from clubportal.errors import UnknownCollection, InvalidDocument, DocumentNotFound


def event(title, date):
    return {'title': title, 'date': date, 'image': 'https://example.org/e.jpg',
            'location': 'Lamahi', 'description': 'Club event'}


def test_add_then_get(app):
    client = DocumentClient()
    doc_id = client.add(collections.EVENTS, event('Blood Drive', '2025-02-01'))

    document = client.get(collections.EVENTS, doc_id)
    assert document['id'] == doc_id
    assert document['title'] == 'Blood Drive'
    assert document['created_at'] is not None
    assert client.get(collections.EVENTS, 'missing') is None


def test_query_filters_and_orders(app):
    client = DocumentClient()
    client.add(collections.EVENTS, event('Older', '2024-05-01'))
    client.add(collections.EVENTS, event('Newest', '2025-09-10'))
    client.add(collections.EVENTS, event('Middle', '2025-01-15'))

    titles = [e['title'] for e in client.query(collections.EVENTS, order_by='date', descending=True)]
    assert titles == ['Newest', 'Middle', 'Older']

    matches = client.query(collections.EVENTS, where={'title': 'Middle'})
    assert [e['date'] for e in matches] == ['2025-01-15']


def test_set_creates_then_replaces_fields(app):
    client = DocumentClient()
    client.set(collections.USERS, 'uid-1', {'email': 'a@example.org', 'username': 'a', 'role': 'MEMBER'})
    client.set(collections.USERS, 'uid-1', {'role': 'ADMIN'})

    record = client.get(collections.USERS, 'uid-1')
    assert record['uid'] == 'uid-1'
    assert record['role'] == 'ADMIN'
    assert record['username'] == 'a'


def test_update_and_delete(app):
    client = DocumentClient()
    doc_id = client.add(collections.EVENTS, event('Cleanup', '2025-03-03'))

    client.update(collections.EVENTS, doc_id, {'location': 'Ghorahi'})
    assert client.get(collections.EVENTS, doc_id)['location'] == 'Ghorahi'

    client.delete(collections.EVENTS, doc_id)
    assert client.get(collections.EVENTS, doc_id) is None
    with pytest.raises(DocumentNotFound):
        client.delete(collections.EVENTS, doc_id)
    with pytest.raises(DocumentNotFound):
        client.update(collections.EVENTS, doc_id, {'title': 'Gone'})


def test_rejects_unknown_collections_and_fields(app):
    client = DocumentClient()
    with pytest.raises(UnknownCollection):
        client.add('meetings', {'title': 'x'})
    with pytest.raises(InvalidDocument):
        client.add(collections.EVENTS, dict(event('x', '2025-01-01'), attendees=3))
    with pytest.raises(InvalidDocument):
        client.query(collections.EVENTS, order_by='attendees')

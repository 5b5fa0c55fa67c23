"""Shared fixtures: in-memory stores, services and an HTTP client."""

import secrets
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from AUZY.BUSINESS.business import DirectoryService, get_directory_service
from AUZY.core.config import BUSINESS_TAG_COLLECTION, POST_TAG_COLLECTION
from AUZY.core.errors import StoreError
from AUZY.core.repository import ARRAY_CONTAINS_ANY, EQUALS
from AUZY.core.security import get_current_admin, get_current_user
from AUZY.media.folders import MediaFolderManager
from AUZY.POST.post import ContentService, get_content_service
from AUZY.TAGS.tags import TagService, get_business_tag_service, get_post_tag_service

TAG_A = 'tagA' + '0' * 16
TAG_B = 'tagB' + '0' * 16
TAG_C = 'tagC' + '0' * 16
AUTHOR_ID = 'author' + '0' * 22
ADMIN_USER = {'uid': 'admin' + '0' * 23, 'email': 'admin@auzy.io'}


class InMemoryRepository:
    """Collection repository backed by a dict, preserving insertion order."""

    def __init__(self, name):
        self.name = name
        self.docs = {}
        self.queries = []
        self.fail_on = set()

    def _check(self, action):
        if action in self.fail_on:
            raise StoreError(f'{action} failed', source=StoreError.DOCUMENT)

    async def add(self, data):
        self._check('add')
        doc_id = secrets.token_hex(10)
        self.docs[doc_id] = dict(data)
        return doc_id

    async def set(self, doc_id, data):
        self._check('set')
        self.docs[doc_id] = dict(data)

    async def get(self, doc_id):
        self._check('get')
        data = self.docs.get(doc_id)
        return dict(data) if data is not None else None

    async def delete(self, doc_id):
        self._check('delete')
        self.docs.pop(doc_id, None)

    async def list_all(self):
        self._check('list')
        return [(doc_id, dict(data)) for doc_id, data in self.docs.items()]

    async def find(self, filters):
        self._check('query')
        self.queries.append(list(filters))
        return [
            (doc_id, dict(data)) for doc_id, data in self.docs.items()
            if all(_matches(data, f) for f in filters)
        ]


def _matches(data, flt):
    value = data.get(flt.field)
    if flt.op == EQUALS:
        return value == flt.value
    if flt.op == ARRAY_CONTAINS_ANY:
        return isinstance(value, list) and any(v in value for v in flt.value)
    raise ValueError(f'unsupported op {flt.op}')


class InMemoryMediaRepository:
    """Object store keeping uploaded bytes by key; lists keys in lexical order."""

    def __init__(self):
        self.objects = {}
        self.fail_delete = set()
        self.fail_list = False

    async def upload(self, local_path, key):
        with open(local_path, 'rb') as fh:
            self.objects[key] = fh.read()

    async def list(self, prefix):
        if self.fail_list:
            raise StoreError('listing failed', source=StoreError.OBJECT)
        return sorted(key for key in self.objects if key.startswith(prefix))

    async def delete(self, key):
        if key in self.fail_delete:
            raise StoreError(f'cannot delete {key}', source=StoreError.OBJECT)
        del self.objects[key]

    async def sign(self, key, expires: datetime):
        return f'https://storage.test/{key}?expires={expires.year}'


@pytest.fixture
def media():
    return InMemoryMediaRepository()


@pytest.fixture
def folders(media):
    return MediaFolderManager(media)


@pytest.fixture
def business_repo():
    return InMemoryRepository('business')


@pytest.fixture
def post_repo():
    return InMemoryRepository('post')


@pytest.fixture
def business_tag_repo():
    return InMemoryRepository(BUSINESS_TAG_COLLECTION)


@pytest.fixture
def post_tag_repo():
    return InMemoryRepository(POST_TAG_COLLECTION)


@pytest.fixture
def directory(business_repo, folders):
    return DirectoryService(business_repo, folders)


@pytest.fixture
def content(post_repo, folders):
    return ContentService(post_repo, folders)


@pytest.fixture
def business_tags(business_tag_repo):
    return TagService(business_tag_repo)


@pytest.fixture
def post_tags(post_tag_repo):
    return TagService(post_tag_repo)


@pytest.fixture
def make_business():
    """Factory for valid business records."""

    def _make(**overrides):
        business = {
            'name': "Joe's Cafe",
            'description': 'Coffee and cake',
            'tags': [TAG_A],
            'phoneNumber': '+260971000000',
            'phoneNumberSecondary': None,
            'email': 'joe@joescafe.com',
            'website': 'https://joescafe.com',
            'address': '12 Cairo Road',
            'city': 'lusaka',
            'isFeatured': False,
            'timeTable': [
                {'day': 'Monday', 'isOpen': True, 'commence': '09:00', 'finish': '17:00'},
                {'day': 'Sunday', 'isOpen': False, 'commence': None, 'finish': None},
            ],
            'appointments': {},
            'featuredImageURL': None,
        }
        business.update(overrides)
        return business

    return _make


@pytest.fixture
def make_post():
    """Factory for valid post records."""

    def _make(**overrides):
        post = {
            'title': 'Grand opening',
            'content': 'Join us on Saturday',
            'tags': [TAG_A],
            'isFeatured': False,
            'featuredImageURL': None,
            'timestamp': 1700000000,
            'authorId': AUTHOR_ID,
        }
        post.update(overrides)
        return post

    return _make


@pytest.fixture
def image_file(tmp_path):
    path = tmp_path / 'photo.png'
    path.write_bytes(b'\x89PNG fake image')
    return path


@pytest.fixture
def app_overrides(directory, content, business_tags, post_tags):
    """Dependency overrides wiring the routers to in-memory services."""
    return {
        get_directory_service: lambda: directory,
        get_content_service: lambda: content,
        get_business_tag_service: lambda: business_tags,
        get_post_tag_service: lambda: post_tags,
        get_current_user: lambda: ADMIN_USER,
        get_current_admin: lambda: ADMIN_USER,
    }


@pytest.fixture
def client(app_overrides):
    from AUZY.main import app

    app.dependency_overrides.update(app_overrides)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

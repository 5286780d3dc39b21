"""
Shared pytest fixtures for the YouTube article monitor tests

Provides an in-memory stand-in for the Supabase query builder so services
and routes can run against real rows without a database.
"""

import copy
import uuid
import pytest
from datetime import datetime, timedelta, timezone
from typing import Dict, List
from unittest.mock import Mock
import requests


class FakeResult:
    def __init__(self, data: List[Dict]):
        self.data = data


class FakeQuery:
    """Chainable query mirroring the subset of postgrest calls the app uses"""

    def __init__(self, db: 'FakeSupabase', table_name: str):
        self.db = db
        self.table_name = table_name
        self.action = 'select'
        self.payload = None
        self.filters = []
        self.order_by = None
        self.row_limit = None

    def select(self, *columns, **kwargs):
        return self

    def insert(self, payload):
        self.action, self.payload = 'insert', payload
        return self

    def upsert(self, payload, **kwargs):
        self.action, self.payload = 'upsert', payload
        return self

    def update(self, payload):
        self.action, self.payload = 'update', payload
        return self

    def delete(self):
        self.action = 'delete'
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, count):
        self.row_limit = count
        return self

    def _matches(self, row) -> bool:
        return all(check(row) for check in self.filters)

    def execute(self) -> FakeResult:
        self.db.calls.append((self.table_name, self.action, copy.deepcopy(self.payload)))

        error = self.db.failures.get((self.table_name, self.action))
        if error:
            raise error

        rows = self.db.tables.setdefault(self.table_name, [])

        if self.action in ('insert', 'upsert'):
            payloads = self.payload if isinstance(self.payload, list) else [self.payload]
            created = []
            for payload in payloads:
                row = {
                    'id': str(uuid.uuid4()),
                    'created_at': datetime.now(timezone.utc).isoformat(),
                    **payload
                }
                rows.append(row)
                created.append(copy.deepcopy(row))
            return FakeResult(created)

        matched = [row for row in rows if self._matches(row)]

        if self.action == 'update':
            for row in matched:
                row.update(self.payload)
            return FakeResult(copy.deepcopy(matched))

        if self.action == 'delete':
            self.db.tables[self.table_name] = [row for row in rows if not self._matches(row)]
            return FakeResult(copy.deepcopy(matched))

        if self.order_by:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda row: row.get(column) or '', reverse=desc)
        if self.row_limit is not None:
            matched = matched[:self.row_limit]

        return FakeResult(copy.deepcopy(matched))


class FakeSupabase:
    """In-memory Supabase client: tables are lists of row dicts"""

    def __init__(self):
        self.tables: Dict[str, List[Dict]] = {}
        self.calls = []
        self.failures = {}
        self.auth = Mock()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def add(self, table_name: str, **row) -> Dict:
        """Seed a row and return it"""
        row.setdefault('id', str(uuid.uuid4()))
        row.setdefault('created_at', datetime.now(timezone.utc).isoformat())
        self.tables.setdefault(table_name, []).append(row)
        return row

    def rows(self, table_name: str) -> List[Dict]:
        return self.tables.get(table_name, [])

    def fail(self, table_name: str, action: str, error: Exception) -> None:
        self.failures[(table_name, action)] = error


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for recency checks"""
    return datetime(2025, 3, 10, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def project_graph(fake_supabase) -> Dict:
    """A project with one channel, one WordPress site and Mistral settings"""
    project = fake_supabase.add('projects', name='Tech News', description='', language='en', auto_monitoring=True)
    channel = fake_supabase.add(
        'youtube_channels',
        project_id=project['id'],
        channel_id='UCabcdefghijklmnopqrstuv',
        channel_name='Tech Channel',
        rss_url='https://www.youtube.com/feeds/videos.xml?channel_id=UCabcdefghijklmnopqrstuv'
    )
    site = fake_supabase.add(
        'wordpress_sites',
        project_id=project['id'],
        url='https://blog.example.com',
        username='editor',
        application_password='abcd efgh ijkl mnop'
    )
    settings = fake_supabase.add(
        'llm_settings',
        project_id=project['id'],
        provider='mistral',
        model_name='mistral-large-latest',
        api_key='mistral-test-key'
    )
    return {'project': project, 'channel': channel, 'site': site, 'settings': settings}


@pytest.fixture
def stored_video(fake_supabase, project_graph) -> Dict:
    return fake_supabase.add(
        'videos',
        channel_id=project_graph['channel']['id'],
        video_id='dQw4w9WgXcQ',
        title='How Transformers Work',
        description='A deep dive into attention',
        published_at='2025-03-10T10:00:00+00:00',
        transcript=None,
        processed=False
    )


@pytest.fixture
def mock_session():
    """Mock requests session"""
    session = Mock(spec=requests.Session)
    session.headers = {}
    return session


@pytest.fixture
def feed_entry_factory(now):
    """Build feed entries as returned by YouTubeFeedFetcher"""
    def make(video_id: str, hours_old: float, title: str = 'A video') -> Dict:
        return {
            'video_id': video_id,
            'title': title,
            'content': f'Description of {title}',
            'author': 'Tech Channel',
            'published': now - timedelta(hours=hours_old)
        }
    return make

"""
Tests for the REST API (app/routes/*.py, app/main.py)

Requests go through FastAPI's TestClient against the in-memory store.
Authentication and outbound services are replaced with dependency overrides.
"""

import asyncio
import pytest
from unittest.mock import AsyncMock, Mock
from fastapi.testclient import TestClient

from app.dependencies import (
    get_article_generator,
    get_feed_fetcher,
    get_monitoring_service,
    get_scheduler,
    get_video_processor,
    get_wordpress_client_factory
)
from app.main import app
from app.middleware.auth import DEV_USER, get_current_user
from app.services.monitoring_service import MonitoringService


@pytest.fixture
def api(fake_supabase):
    app.state.supabase = fake_supabase
    app.state.scheduler = None
    app.dependency_overrides[get_current_user] = lambda: dict(DEV_USER)
    yield app
    app.dependency_overrides.clear()
    app.state.supabase = None


@pytest.fixture
def client(api):
    return TestClient(api)


@pytest.fixture
def wp_factory(api):
    wp_client = Mock()
    wp_client.verify_credentials.return_value = True
    factory = Mock(return_value=wp_client)
    api.dependency_overrides[get_wordpress_client_factory] = lambda: factory
    return factory


class TestRootEndpoints:

    @pytest.mark.unit
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()['status'] == 'online'

    @pytest.mark.unit
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'
        assert response.json()['database'] is True

    @pytest.mark.unit
    def test_unhandled_errors_use_global_handler(self, api):
        def broken_scheduler():
            raise RuntimeError("scheduler unavailable")

        api.dependency_overrides[get_scheduler] = broken_scheduler

        response = TestClient(api, raise_server_exceptions=False).get("/api/monitoring/logs")

        assert response.status_code == 500
        assert response.json()['error'] == 'Internal server error'
        assert response.json()['message'] == 'scheduler unavailable'

    @pytest.mark.unit
    def test_route_errors_become_500(self, api, client):
        api.dependency_overrides[get_monitoring_service] = lambda: Mock(get_logs=Mock(side_effect=KeyError('x')))

        response = client.get("/api/monitoring/logs")

        assert response.status_code == 500
        assert 'Failed to fetch monitoring logs' in response.json()['detail']


class TestProjectRoutes:
    """Tests for /api/projects"""

    @pytest.mark.unit
    def test_create_requires_name(self, client):
        response = client.post("/api/projects", json={'description': 'no name'})
        assert response.status_code == 400
        assert response.json()['detail'] == "Project name is required"

    @pytest.mark.unit
    def test_create_and_list(self, client, fake_supabase):
        response = client.post("/api/projects", json={'name': 'Cooking'})

        assert response.status_code == 201
        created = response.json()
        assert created['name'] == 'Cooking'
        assert created['language'] == 'en'
        assert created['auto_monitoring'] is True
        assert [p['name'] for p in client.get("/api/projects").json()] == ['Cooking']

    @pytest.mark.unit
    def test_get_includes_related_rows_with_masked_secrets(self, client, project_graph):
        response = client.get(f"/api/projects/{project_graph['project']['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body['wordpressSites'][0]['application_password'] == '********'
        assert body['llmSettings'][0]['api_key'] == '********'
        assert body['youtubeChannels'][0]['channel_id'] == project_graph['channel']['channel_id']

    @pytest.mark.unit
    def test_get_unknown_project(self, client):
        assert client.get("/api/projects/missing").status_code == 404

    @pytest.mark.unit
    def test_update_and_delete(self, client, fake_supabase, project_graph):
        project_id = project_graph['project']['id']

        response = client.put(f"/api/projects/{project_id}", json={'name': 'Renamed', 'language': 'fr'})
        assert response.status_code == 200
        assert response.json()['name'] == 'Renamed'
        assert response.json()['language'] == 'fr'

        assert client.delete(f"/api/projects/{project_id}").status_code == 200
        assert fake_supabase.rows('projects') == []


class TestWordPressRoutes:
    """Tests for /api/wordpress"""

    @pytest.mark.unit
    def test_list_masks_passwords(self, client, project_graph):
        response = client.get(f"/api/wordpress/project/{project_graph['project']['id']}")

        assert response.status_code == 200
        assert response.json()[0]['application_password'] == '********'

    @pytest.mark.unit
    def test_add_site_after_verification(self, client, fake_supabase, project_graph, wp_factory):
        response = client.post(
            f"/api/wordpress/project/{project_graph['project']['id']}",
            json={'url': 'https://second.example.com', 'username': 'bob', 'application_password': 'pw'}
        )

        assert response.status_code == 201
        assert response.json()['application_password'] == '********'
        wp_factory.assert_called_once_with('https://second.example.com', 'bob', 'pw')
        assert len(fake_supabase.rows('wordpress_sites')) == 2

    @pytest.mark.unit
    def test_add_site_rejects_invalid_credentials(self, client, fake_supabase, project_graph, wp_factory):
        wp_factory.return_value.verify_credentials.return_value = False

        response = client.post(
            f"/api/wordpress/project/{project_graph['project']['id']}",
            json={'url': 'https://second.example.com', 'username': 'bob', 'application_password': 'bad'}
        )

        assert response.status_code == 400
        assert len(fake_supabase.rows('wordpress_sites')) == 1

    @pytest.mark.unit
    def test_add_duplicate_site(self, client, project_graph, wp_factory):
        response = client.post(
            f"/api/wordpress/project/{project_graph['project']['id']}",
            json={'url': 'https://blog.example.com', 'username': 'editor', 'application_password': 'pw'}
        )

        assert response.status_code == 400
        assert 'already added' in response.json()['detail']

    @pytest.mark.unit
    def test_update_keeps_password_when_omitted(self, client, fake_supabase, project_graph, wp_factory):
        site_id = project_graph['site']['id']

        response = client.put(f"/api/wordpress/{site_id}", json={'url': 'https://blog.example.com', 'username': 'chief'})

        assert response.status_code == 200
        stored = fake_supabase.rows('wordpress_sites')[0]
        assert stored['username'] == 'chief'
        assert stored['application_password'] == 'abcd efgh ijkl mnop'
        wp_factory.assert_not_called()

    @pytest.mark.unit
    def test_verify(self, client, wp_factory):
        response = client.post(
            "/api/wordpress/verify",
            json={'url': 'https://blog.example.com', 'username': 'editor', 'application_password': 'pw'}
        )
        assert response.json() == {'valid': True, 'message': 'WordPress credentials are valid'}

    @pytest.mark.unit
    def test_verify_requires_all_fields(self, client):
        assert client.post("/api/wordpress/verify", json={'url': 'https://x'}).status_code == 400


class TestYouTubeRoutes:
    """Tests for /api/youtube"""

    @pytest.mark.unit
    def test_add_channel_builds_rss_url(self, client, project_graph):
        response = client.post(
            f"/api/youtube/project/{project_graph['project']['id']}",
            json={'channelId': 'UCnewchannel', 'channelName': 'New Channel'}
        )

        assert response.status_code == 201
        assert response.json()['rss_url'] == "https://www.youtube.com/feeds/videos.xml?channel_id=UCnewchannel"

    @pytest.mark.unit
    def test_add_duplicate_channel(self, client, project_graph):
        response = client.post(
            f"/api/youtube/project/{project_graph['project']['id']}",
            json={'channelId': project_graph['channel']['channel_id'], 'channelName': 'Again'}
        )
        assert response.status_code == 400

    @pytest.mark.unit
    def test_validate_channel(self, api, client):
        fetcher = Mock()
        fetcher.fetch_channel_feed.return_value = [{'author': 'Tech Channel'}, {'author': 'Tech Channel'}]
        api.dependency_overrides[get_feed_fetcher] = lambda: fetcher

        response = client.post("/api/youtube/validate", json={'channelId': 'UCabc'})

        assert response.json()['valid'] is True
        assert response.json()['channelName'] == 'Tech Channel'
        assert response.json()['videoCount'] == 2

    @pytest.mark.unit
    def test_validate_unreachable_channel(self, api, client):
        fetcher = Mock()
        fetcher.fetch_channel_feed.side_effect = Exception("404")
        api.dependency_overrides[get_feed_fetcher] = lambda: fetcher

        response = client.post("/api/youtube/validate", json={'channelId': 'UCbad'})

        assert response.status_code == 200
        assert response.json()['valid'] is False

    @pytest.mark.unit
    def test_update_channel(self, client, fake_supabase, project_graph):
        response = client.put(f"/api/youtube/{project_graph['channel']['id']}", json={'channelName': 'Renamed'})

        assert response.status_code == 200
        assert fake_supabase.rows('youtube_channels')[0]['channel_name'] == 'Renamed'

    @pytest.mark.unit
    def test_check_unknown_channel(self, api, client, fake_supabase):
        api.dependency_overrides[get_feed_fetcher] = lambda: Mock()
        assert client.post("/api/youtube/missing/check").status_code == 404

    @pytest.mark.unit
    def test_check_all_channels(self, api, client):
        service = Mock()
        service.check_for_new_videos = AsyncMock(return_value=['v1', 'v2'])
        api.dependency_overrides[get_monitoring_service] = lambda: service

        response = client.post("/api/youtube/check-all-channels")

        assert response.json()['newVideosCount'] == 2
        service.check_for_new_videos.assert_awaited_once_with('manual')


class TestVideoRoutes:
    """Tests for /api/videos"""

    @pytest.mark.unit
    def test_add_video_rejects_duplicates(self, client, stored_video, project_graph):
        response = client.post(
            "/api/videos",
            json={'channelId': project_graph['channel']['id'], 'videoId': stored_video['video_id']}
        )
        assert response.status_code == 400

    @pytest.mark.unit
    def test_add_video(self, client, fake_supabase, project_graph):
        response = client.post("/api/videos", json={'channelId': project_graph['channel']['id'], 'videoId': 'abc'})

        assert response.status_code == 201
        assert response.json()['title'] == 'Untitled Video'
        assert response.json()['processed'] is False

    @pytest.mark.unit
    def test_get_video_with_relations(self, client, fake_supabase, stored_video, project_graph):
        fake_supabase.add('articles', video_id=stored_video['id'], title='A', content='<p>x</p>', language='en')

        response = client.get(f"/api/videos/{stored_video['id']}")

        body = response.json()
        assert response.status_code == 200
        assert body['youtube_channels']['projects']['id'] == project_graph['project']['id']
        assert len(body['articles']) == 1

    @pytest.mark.unit
    def test_get_unknown_video(self, client):
        assert client.get("/api/videos/missing").status_code == 404

    @pytest.mark.unit
    def test_list_project_videos(self, client, stored_video, project_graph):
        response = client.get(f"/api/videos/project/{project_graph['project']['id']}")
        assert [video['id'] for video in response.json()] == [stored_video['id']]

    @pytest.mark.unit
    def test_process_video(self, api, client, stored_video):
        processor = Mock()
        processor.process_video = AsyncMock(return_value={'id': 'article-1', 'title': 'T'})
        api.dependency_overrides[get_video_processor] = lambda: processor

        response = client.post(f"/api/videos/{stored_video['id']}/process")

        assert response.status_code == 200
        assert response.json()['id'] == 'article-1'

    @pytest.mark.unit
    def test_transcript_unavailable(self, api, client, stored_video):
        processor = Mock()
        processor.fetch_transcript = AsyncMock(return_value={'video_id': stored_video['id'], 'transcript': ''})
        api.dependency_overrides[get_video_processor] = lambda: processor

        response = client.post(f"/api/videos/{stored_video['id']}/transcript")

        assert response.status_code == 404
        assert response.json()['detail'] == "No transcript available for this video"


class TestArticleRoutes:
    """Tests for /api/articles"""

    @pytest.mark.unit
    def test_update_requires_title_and_content(self, client):
        assert client.put("/api/articles/any", json={'title': 'Only title'}).status_code == 400

    @pytest.mark.unit
    def test_regenerate_without_transcript(self, client, stored_video):
        response = client.post(f"/api/articles/{stored_video['id']}/regenerate", json={'language': 'en'})

        assert response.status_code == 400
        assert response.json()['detail'] == "Video has no transcript"

    @pytest.mark.unit
    def test_regenerate(self, api, client, fake_supabase, stored_video):
        fake_supabase.rows('videos')[0]['transcript'] = "stored transcript"
        generator = Mock()
        generator.generate.return_value = {'title': 'Fresh', 'content': '<p>New</p>'}
        api.dependency_overrides[get_article_generator] = lambda: generator

        response = client.post(f"/api/articles/{stored_video['id']}/regenerate", json={'language': 'de'})

        assert response.status_code == 200
        assert response.json()['language'] == 'de'
        assert fake_supabase.rows('articles')[0]['title'] == 'Fresh'

    @pytest.mark.unit
    def test_publish_without_site(self, client, fake_supabase, stored_video):
        fake_supabase.tables['wordpress_sites'] = []
        article = fake_supabase.add('articles', video_id=stored_video['id'], title='A', content='<p>x</p>',
                                    language='en', published=False)

        response = client.post(f"/api/articles/{article['id']}/publish")

        assert response.status_code == 404

    @pytest.mark.unit
    def test_list_project_articles(self, client, fake_supabase, stored_video, project_graph):
        fake_supabase.add('articles', video_id=stored_video['id'], title='A', content='<p>x</p>', language='en')

        response = client.get(f"/api/articles/project/{project_graph['project']['id']}")

        assert len(response.json()) == 1
        assert response.json()[0]['videos']['id'] == stored_video['id']


class TestLLMRoutes:
    """Tests for /api/llm"""

    @pytest.mark.unit
    def test_defaults_when_not_configured(self, client):
        response = client.get("/api/llm/project/new-project")

        assert response.json() == {
            'project_id': 'new-project',
            'provider': 'mistral',
            'model_name': 'mistral-large-latest',
            'api_key': None
        }

    @pytest.mark.unit
    def test_update_requires_provider_and_model(self, client, project_graph):
        response = client.put(f"/api/llm/project/{project_graph['project']['id']}", json={'provider': 'mistral'})
        assert response.status_code == 400

    @pytest.mark.unit
    def test_update_keeps_key_when_omitted(self, client, fake_supabase, project_graph):
        response = client.put(
            f"/api/llm/project/{project_graph['project']['id']}",
            json={'provider': 'mistral', 'model_name': 'mistral-small-latest'}
        )

        assert response.status_code == 200
        assert response.json()['api_key'] == '********'
        stored = fake_supabase.rows('llm_settings')[0]
        assert stored['model_name'] == 'mistral-small-latest'
        assert stored['api_key'] == 'mistral-test-key'

    @pytest.mark.unit
    def test_update_rejects_unknown_provider(self, client, fake_supabase, project_graph):
        response = client.put(
            f"/api/llm/project/{project_graph['project']['id']}",
            json={'provider': 'mistrall', 'model_name': 'mistral-large-latest'}
        )

        assert response.status_code == 400
        assert response.json()['detail'] == "Unsupported provider: mistrall"
        assert fake_supabase.rows('llm_settings')[0]['provider'] == 'mistral'

    @pytest.mark.unit
    def test_verify_unsupported_provider(self, client):
        response = client.post("/api/llm/verify", json={'provider': 'cohere', 'api_key': 'k'})
        assert response.json() == {'valid': False, 'message': 'Unsupported provider: cohere'}

    @pytest.mark.unit
    def test_verify_key(self, api, client):
        generator = Mock()
        generator.verify_api_key.return_value = True
        api.dependency_overrides[get_article_generator] = lambda: generator

        response = client.post("/api/llm/verify", json={'provider': 'Mistral', 'api_key': 'k'})

        assert response.json() == {'valid': True, 'message': 'Mistral API key is valid'}
        generator.verify_api_key.assert_called_once_with('mistral', 'k')


class TestMonitoringRoutes:
    """Tests for /api/monitoring"""

    @pytest.mark.unit
    def test_trigger_runs_in_background(self, api, client):
        calls = []

        class FakeService:
            async def run_monitoring_now(self):
                calls.append('run')
                return {'success': True}

        api.dependency_overrides[get_monitoring_service] = lambda: FakeService()

        response = client.post("/api/monitoring/trigger")

        assert response.status_code == 200
        assert response.json()['success'] is True
        assert calls == ['run']

    @pytest.mark.unit
    def test_logs(self, client, fake_supabase):
        fake_supabase.add('monitoring_logs', trigger='manual', status='success',
                          started_at='2025-03-10T00:00:00+00:00')

        response = client.get("/api/monitoring/logs")

        assert response.status_code == 200
        assert response.json()['success'] is True
        assert len(response.json()['data']) == 1
        assert response.json()['nextRuns'] == {}


class TestDefaultProjectMonitoring:
    """Projects created through the API are picked up by automatic runs"""

    @pytest.mark.unit
    def test_scheduled_run_checks_new_project_channel(self, client, fake_supabase, now, feed_entry_factory):
        """Should fetch the feed of a project created without auto_monitoring"""
        project = client.post("/api/projects", json={'name': 'Default'}).json()
        client.post(
            f"/api/youtube/project/{project['id']}",
            json={'channelId': 'UCdefaultchannel', 'channelName': 'Default Channel'}
        )

        feed_fetcher = Mock()
        feed_fetcher.fetch_channel_feed.return_value = [feed_entry_factory('fresh000001', hours_old=2)]
        video_processor = Mock()
        video_processor.process_video = AsyncMock(return_value={})
        service = MonitoringService(fake_supabase, feed_fetcher=feed_fetcher, video_processor=video_processor)

        new_ids = asyncio.run(service.check_for_new_videos('scheduled', now=now))

        feed_fetcher.fetch_channel_feed.assert_called_once_with('UCdefaultchannel')
        assert len(new_ids) == 1

"""
Tests for processors/transcript_processor.py

Tests YouTube transcript extraction with mocked API responses.
All external dependencies (YouTube Transcript API) are mocked.
"""

import asyncio
import time
import pytest
from unittest.mock import MagicMock, Mock, patch

from processors.transcript_processor import TranscriptProcessor


@pytest.fixture
def processor():
    return TranscriptProcessor(timeout=5)


@pytest.fixture
def sample_transcript_entries():
    """Sample transcript entries returned by YouTube API"""
    entries = []
    for i, text in enumerate([
        "Welcome to this video about transformers",
        "Today we look at attention",
        "Let's start with a simple example"
    ]):
        entry = MagicMock()
        entry.start = float(i * 5)
        entry.text = text
        entry.duration = 5.0
        entries.append(entry)
    return entries


def _transcript_list(manual=None, generated=None):
    """Build a mocked TranscriptList; None means the lookup raises"""
    transcript_list = Mock()

    def finder(result):
        if result is None:
            return Mock(side_effect=Exception("No transcript found"))
        transcript = Mock()
        transcript.fetch.return_value = result
        return Mock(return_value=transcript)

    transcript_list.find_manually_created_transcript = finder(manual)
    transcript_list.find_generated_transcript = finder(generated)
    return transcript_list


class TestTranscriptProcessorInitialization:
    """Tests for TranscriptProcessor initialization"""

    @pytest.mark.unit
    def test_timeout_from_environment_in_milliseconds(self, monkeypatch):
        """Should read YOUTUBE_TRANSCRIPT_TIMEOUT as milliseconds"""
        monkeypatch.setenv('YOUTUBE_TRANSCRIPT_TIMEOUT', '30000')
        assert TranscriptProcessor().timeout == 30

    @pytest.mark.unit
    def test_explicit_timeout(self):
        assert TranscriptProcessor(timeout=2.5).timeout == 2.5


class TestGetYoutubeTranscript:
    """Tests for TranscriptProcessor.get_youtube_transcript()"""

    @pytest.mark.unit
    @patch('youtube_transcript_api.YouTubeTranscriptApi')
    def test_prefers_manual_transcript(self, mock_api_class, processor, sample_transcript_entries):
        """Should use manually created captions when available"""
        mock_api_class.return_value.list.return_value = _transcript_list(
            manual=sample_transcript_entries, generated=[]
        )

        result = processor.get_youtube_transcript('dQw4w9WgXcQ', 'en')

        assert result['success'] is True
        assert result['type'] == 'manual'
        assert result['total_entries'] == 3
        assert result['transcript'][0]['text'] == "Welcome to this video about transformers"

    @pytest.mark.unit
    @patch('youtube_transcript_api.YouTubeTranscriptApi')
    def test_falls_back_to_generated(self, mock_api_class, processor, sample_transcript_entries):
        """Should use auto-generated captions when no manual ones exist"""
        mock_api_class.return_value.list.return_value = _transcript_list(
            manual=None, generated=sample_transcript_entries
        )

        result = processor.get_youtube_transcript('dQw4w9WgXcQ', 'fr')

        assert result['success'] is True
        assert result['type'] == 'auto_generated'

    @pytest.mark.unit
    @patch('youtube_transcript_api.YouTubeTranscriptApi')
    def test_no_transcript_in_language(self, mock_api_class, processor):
        """Should report failure when neither caption kind exists"""
        mock_api_class.return_value.list.return_value = _transcript_list()

        result = processor.get_youtube_transcript('dQw4w9WgXcQ', 'de')

        assert result['success'] is False
        assert 'de' in result['error']


class TestGetTranscriptText:
    """Tests for TranscriptProcessor.get_transcript_text()"""

    @pytest.mark.unit
    def test_joins_segments_with_spaces(self, processor):
        with patch.object(processor, 'get_youtube_transcript', return_value={
            'success': True,
            'type': 'manual',
            'transcript': [{'text': 'Hello'}, {'text': 'world'}]
        }):
            assert asyncio.run(processor.get_transcript_text('dQw4w9WgXcQ')) == 'Hello world'

    @pytest.mark.unit
    def test_missing_transcript_returns_empty(self, processor):
        with patch.object(processor, 'get_youtube_transcript', return_value={
            'success': False,
            'error': 'No en transcript available'
        }):
            assert asyncio.run(processor.get_transcript_text('dQw4w9WgXcQ')) == ''

    @pytest.mark.unit
    def test_exception_returns_empty(self, processor):
        """Should never raise on API errors"""
        with patch.object(processor, 'get_youtube_transcript', side_effect=RuntimeError("IP blocked")):
            assert asyncio.run(processor.get_transcript_text('dQw4w9WgXcQ')) == ''

    @pytest.mark.unit
    def test_timeout_returns_empty(self):
        """Should give up after the configured timeout"""
        processor = TranscriptProcessor(timeout=0.05)

        def slow_fetch(video_id, language):
            time.sleep(0.5)
            return {'success': True, 'type': 'manual', 'transcript': [{'text': 'late'}]}

        with patch.object(processor, 'get_youtube_transcript', side_effect=slow_fetch):
            assert asyncio.run(processor.get_transcript_text('dQw4w9WgXcQ')) == ''

"""
Tests for the remote transcription wrapper with the OpenAI client mocked.
"""
from types import SimpleNamespace

import openai
import pytest

from dictation_app.core import transcribe as transcribe_mod
from dictation_app.core.transcribe import (
    TranscriptionError,
    pieces_to_sentences,
    transcribe_and_segment,
)


@pytest.fixture
def client(mocker, fixture_data):
    """OpenAI client whose transcription call returns the JSON fixture."""
    client = mocker.MagicMock()
    client.audio.transcriptions.create.return_value = fixture_data
    return client


def _as_tuples(segments):
    return [(s.text, s.start_time, s.end_time) for s in segments]


def test_transcribe_and_segment_merges_sentences(client, fixture_segments):
    segments = transcribe_and_segment(b"RIFF....", "audio/wav", language="nl", client=client)

    assert len(segments) == len(fixture_segments)
    for got, expected in zip(segments, fixture_segments):
        assert got.text == expected.text
        assert got.start_time == pytest.approx(expected.start_time)
        assert got.end_time == pytest.approx(expected.end_time)


def test_request_parameters(client):
    transcribe_and_segment(b"ID3", "audio/mpeg", language="nl", client=client)

    kwargs = client.audio.transcriptions.create.call_args.kwargs
    assert kwargs["response_format"] == "verbose_json"
    assert kwargs["timestamp_granularities"] == ["segment"]
    assert kwargs["language"] == "nl"
    filename, data, mime_type = kwargs["file"]
    assert filename == "audio.mp3"
    assert data == b"ID3"
    assert mime_type == "audio/mpeg"


def test_auto_language_is_not_sent(client):
    transcribe_and_segment(b"ID3", "audio/mpeg", language="auto", client=client)
    assert "language" not in client.audio.transcriptions.create.call_args.kwargs


def test_accepts_response_objects(mocker):
    client = mocker.MagicMock()
    client.audio.transcriptions.create.return_value = SimpleNamespace(segments=[
        SimpleNamespace(start=1.0, end=2.0, text="Goedemorgen."),
    ])

    segments = transcribe_and_segment(b"x", "audio/wav", client=client)
    assert [s.text for s in segments] == ["Goedemorgen."]


def test_progress_callback(client, mocker):
    progress = mocker.MagicMock()
    transcribe_and_segment(b"x", "audio/wav", client=client, progress_callback=progress)
    values = [c.args[0] for c in progress.call_args_list]
    assert values == sorted(values)
    assert values[-1] == 100


def test_upstream_error_raises_transcription_error(mocker):
    client = mocker.MagicMock()
    client.audio.transcriptions.create.side_effect = openai.OpenAIError("connection reset")

    with pytest.raises(TranscriptionError) as exc_info:
        transcribe_and_segment(b"x", "audio/wav", client=client)
    assert "Failed to transcribe audio" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, openai.OpenAIError)


def test_malformed_response_raises_transcription_error(mocker):
    client = mocker.MagicMock()
    client.audio.transcriptions.create.return_value = {"segments": [{"text": "no times"}]}

    with pytest.raises(TranscriptionError):
        transcribe_and_segment(b"x", "audio/wav", client=client)


def test_empty_result_raises_transcription_error(mocker):
    client = mocker.MagicMock()
    client.audio.transcriptions.create.return_value = {"segments": []}

    with pytest.raises(TranscriptionError, match="No sentences detected"):
        transcribe_and_segment(b"x", "audio/wav", client=client)


def test_missing_api_key(mocker):
    mocker.patch.object(transcribe_mod, "OPENAI_API_KEY", None)
    with pytest.raises(TranscriptionError, match="OPENAI_API_KEY"):
        transcribe_and_segment(b"x", "audio/wav")


@pytest.mark.parametrize(
    "pieces, expected",
    [
        # unterminated trailing text still becomes a sentence
        ([(0.0, 1.0, "Hallo"), (1.0, 2.0, "wereld")],
         [("Hallo wereld", 0.0, 2.0)]),
        # blank pieces are skipped
        ([(0.0, 1.0, "  "), (1.0, 2.0, "Ja!")],
         [("Ja!", 1.0, 2.0)]),
        # each terminator closes a sentence
        ([(0.0, 1.0, "Een."), (1.0, 2.0, "Twee?"), (2.0, 3.0, "Drie…")],
         [("Een.", 0.0, 1.0), ("Twee?", 1.0, 2.0), ("Drie…", 2.0, 3.0)]),
    ]
)
def test_pieces_to_sentences(pieces, expected):
    assert _as_tuples(pieces_to_sentences(pieces, preroll=0.0, end_pad=0.0)) == expected


def test_pieces_to_sentences_padding_overlaps_and_clamps():
    segments = pieces_to_sentences(
        [(0.2, 1.0, "Een."), (1.1, 2.0, "Twee.")], preroll=0.5, end_pad=0.3
    )
    assert segments[0].start_time == 0.0               # clamped at zero
    assert segments[0].end_time == pytest.approx(1.3)
    assert segments[1].start_time == pytest.approx(0.6)
    assert segments[1].start_time < segments[0].end_time  # padded windows overlap


def test_pieces_to_sentences_drops_invalid_windows():
    segments = pieces_to_sentences([(3.0, 3.0, "Nul."), (4.0, 5.0, "Goed.")], preroll=0.0, end_pad=0.0)
    assert [s.text for s in segments] == ["Goed."]

"""Tests for the NDJSON sink."""

import io
import json
import sys

from apps.generator.src.infra.sink import NdjsonSink, open_ndjson_stream
from libs.models.profiles import ProfileType, UserProfile


def _events(make_settings, make_event_generator, registered_profile):
    settings = make_settings(event_count_per_user={"min": 4, "max": 4})
    return make_event_generator(settings).generate_sequence(registered_profile, "US")


class TestNdjsonSink:
    """One JSON object per line, nothing else."""

    def test_write_all(self, make_settings, make_event_generator, registered_profile):
        events = _events(make_settings, make_event_generator, registered_profile)
        buffer = io.StringIO()
        sink = NdjsonSink(buffer)

        assert sink.write_all(events) == 4
        assert sink.written == 4

        output = buffer.getvalue()
        assert output.endswith("\n")
        lines = output.splitlines()
        assert len(lines) == 4
        records = [json.loads(line) for line in lines]
        assert [r["id"] for r in records] == [e.id for e in events]
        assert all(r["userId"] == "user-1" for r in records)

    def test_write_all_empty(self):
        buffer = io.StringIO()
        assert NdjsonSink(buffer).write_all([]) == 0
        assert buffer.getvalue() == ""

    def test_profiles_use_camel_case_and_omit_absent_fields(self, anonymous_profile):
        full = UserProfile(
            id="user-9",
            profile_type=ProfileType.REGISTERED,
            cookie_id="cookie-9",
            first_name="Ada",
            email="ada@example.com",
            email_hash="abc123",
        )
        buffer = io.StringIO()

        assert NdjsonSink(buffer).write_all([full, anonymous_profile]) == 2

        first, second = [json.loads(line) for line in buffer.getvalue().splitlines()]
        assert first["firstName"] == "Ada"
        assert first["emailHash"] == "abc123"
        assert first["profileType"] == "registered"
        assert "maidId" not in first
        assert second == {"id": "anon-1", "profileType": "anonymous", "cookieId": "cookie-2"}


class TestOpenNdjsonStream:
    def test_defaults_to_stdout(self):
        with open_ndjson_stream(None) as stream:
            assert stream is sys.stdout
        assert not sys.stdout.closed

    def test_writes_file_and_creates_parents(
        self, tmp_path, make_settings, make_event_generator, registered_profile
    ):
        events = _events(make_settings, make_event_generator, registered_profile)
        target = tmp_path / "out" / "user_events.ndjson"

        with open_ndjson_stream(str(target)) as stream:
            NdjsonSink(stream).write_all(events)
        assert stream.closed

        lines = target.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 4
        assert json.loads(lines[0])["eventType"] in ("page_view", "search")

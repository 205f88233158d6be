"""
Entrypoint for the generator service.
"""

from contextlib import ExitStack

from apps.generator.src.core.bootstrap import build_service
from apps.generator.src.core.config import get_generator_settings
from apps.generator.src.infra.sink import open_ndjson_stream
from libs.config import AppConfig
from libs.observability import get_logger, init_observability, shutdown_metrics


def main() -> None:
    """
    Main entrypoint for the generator.

    Initializes observability, opens the event stream (stdout unless
    `GENERATOR__OUTPUT_PATH` is set) and the profile file when one resolves,
    then runs one generation.
    """
    app_cfg = AppConfig.load()
    init_observability(level=app_cfg.service.resolve_log_level(), otel=app_cfg.otel)
    log = get_logger("cdp-datagen")

    try:
        settings = get_generator_settings()
        profiles_path = settings.resolve_profiles_output_path()
        with ExitStack() as stack:
            stream = stack.enter_context(open_ndjson_stream(settings.output_path))
            profile_stream = None
            if profiles_path is not None:
                profile_stream = stack.enter_context(open_ndjson_stream(profiles_path))
            build_service(stream, profile_stream).run()
    except Exception as exc:
        log.exception("Generation failed.", extra={"error": str(exc)})
        raise SystemExit(1) from exc
    finally:
        shutdown_metrics()


if __name__ == "__main__":
    main()

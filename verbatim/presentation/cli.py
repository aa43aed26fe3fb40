import logging
import sys

from verbatim.config.settings import settings
from verbatim.container import configure_container, container
from verbatim.core.models import AnswerMode, IngestStatus
from verbatim.core.services.answer_service import AnswerService
from verbatim.core.services.ingest_service import IngestService
from verbatim.core.services.ticket_draft import format_ticket_draft_as_text

logging.basicConfig(level=settings.log_level.upper(), format="%(message)s")
logger = logging.getLogger(__name__)


def _ingest():
    ingest_service = container.resolve(IngestService)
    report = ingest_service.run()

    for result in report.results:
        if result.status is IngestStatus.ERROR:
            logger.error(f"  {result.filename}: {result.error}")

    logger.info(
        f"Indexed {report.total_chunks} chunks from {report.total_processed} files "
        f"({report.total_skipped} skipped, {report.total_errors} errors)"
    )
    return report


def cmd_ingest():
    """Ingest command - index configured docs and KB paths."""
    configure_container(settings)
    _ingest()


def cmd_ask(question: str, force_ticket_draft: bool = False):
    """Ask command - index, then plan an answer for one question."""
    configure_container(settings)
    _ingest()

    answer_service = container.resolve(AnswerService)
    plan = answer_service.plan(question, force_ticket_draft=force_ticket_draft)

    logger.info(f"\nConfidence: {plan.confidence.value}")
    logger.info(f"Mode: {plan.mode.value}")

    if plan.sources:
        logger.info(f"\nSources:\n{plan.sources}")

    if plan.suggested_routes:
        logger.info("Suggested routes:")
        for suggestion in plan.suggested_routes:
            logger.info(f"  {suggestion.route} ({suggestion.title})")

    if plan.mode is AnswerMode.TICKET_DRAFT and plan.ticket_draft:
        logger.info(f"\n{format_ticket_draft_as_text(plan.ticket_draft)}")
    else:
        logger.info(f"\n{plan.fallback_answer}")


def main():
    """CLI entry point."""
    if len(sys.argv) < 2:
        print("Usage: python -m verbatim.presentation.cli <command>")
        print('Commands: ingest, ask "<question>" [--ticket]')
        sys.exit(1)

    command = sys.argv[1]

    if command == "ingest":
        cmd_ingest()
    elif command == "ask":
        args = [a for a in sys.argv[2:] if a != "--ticket"]
        if not args:
            print('Usage: python -m verbatim.presentation.cli ask "<question>" [--ticket]')
            sys.exit(1)
        cmd_ask(" ".join(args), force_ticket_draft="--ticket" in sys.argv[2:])
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()

"""
Snapshot ingestion into the remote error store.

For each API present in the dataset the ingester creates one API node, then
for every record an error pattern, a solution and one parameter node per
implicated parameter. A failing record is logged and counted; the run always
continues with the next record.
"""

from typing import Dict, List, Optional, Sequence

from errata.errors import ErrataError
from errata.models.error_record import ErrorRecord
from errata.models.severity import Severity
from errata.models.store import IngestReport
from errata.pipeline.normalizer import natural_key
from errata.services.api_registry import APIRegistry, get_api_registry
from errata.services.store import ErrorStore
from errata.utils.logging import get_logger, log_error_with_context, log_pipeline_stage

logger = get_logger(__name__, stage="ingest")

UPVOTES_BY_SEVERITY: Dict[Severity, int] = {
    Severity.CRITICAL: 10,
    Severity.ERROR: 7,
    Severity.WARNING: 5,
}
DEFAULT_UPVOTES = 3

DEFAULT_METHOD = "POST"
DEFAULT_HTTP_STATUS = 400
PROGRESS_EVERY = 10

STRIPE_EXAMPLE = '''# Handle {code}
import stripe

try:
    stripe.{resource_class}.create(
        # parameters...
    )
except stripe.error.StripeError as e:
    if e.code == "{code}":
        # {solution}
        print("Error:", e.user_message)
'''

GITHUB_EXAMPLE = '''# Handle {code}
import httpx

response = httpx.get(
    "https://api.github.com/{resource}",
    headers={{
        "Authorization": "Bearer <token>",
        "Accept": "application/vnd.github+json",
    }},
)
if response.status_code == {http_status}:
    # {solution}
    print("GitHub API error:", response.json().get("message"))
'''

GENERIC_EXAMPLE = '''# Handle {code}
# {solution}
'''

CODE_EXAMPLES = {
    "stripe": STRIPE_EXAMPLE,
    "github": GITHUB_EXAMPLE,
}


def calculate_upvotes(severity: Severity) -> int:
    """Initial solution ranking: more severe errors rank higher."""
    return UPVOTES_BY_SEVERITY.get(severity, DEFAULT_UPVOTES)


def generate_code_example(record: ErrorRecord) -> str:
    """Handling snippet in the style of the record's API client."""
    template = CODE_EXAMPLES.get(record.api.lower(), GENERIC_EXAMPLE)
    return template.format(
        code=natural_key(record),
        resource=record.resource,
        resource_class="".join(part.capitalize() for part in record.resource.split("_")),
        http_status=record.http_status or DEFAULT_HTTP_STATUS,
        solution=record.solution_description,
    )


class Ingester:
    """
    Writes normalized records into an ``ErrorStore``.

    Args:
        store: Target store
        registry: API registry supplying the API node metadata
    """

    def __init__(self, store: ErrorStore, registry: Optional[APIRegistry] = None):
        self.store = store
        self.registry = registry or get_api_registry()

    async def ingest(self, records: Sequence[ErrorRecord]) -> List[IngestReport]:
        """
        Ingest a dataset, one API at a time in order of first appearance.

        Raises:
            NotFoundError: If a record's API is not registered
            UpstreamUnavailableError: If an API node cannot be created
        """
        by_api: Dict[str, List[ErrorRecord]] = {}
        for record in records:
            by_api.setdefault(record.api, []).append(record)

        log_pipeline_stage(logger, "ingest", "started", count=len(records))
        reports = [await self.ingest_api(api, api_records) for api, api_records in by_api.items()]
        log_pipeline_stage(
            logger, "ingest", "completed", count=sum(r.succeeded for r in reports)
        )
        return reports

    async def ingest_api(self, api: str, records: Sequence[ErrorRecord]) -> IngestReport:
        """
        Create the API node and ingest its records.

        Returns:
            IngestReport with per-record outcome counts
        """
        definition = self.registry.get(api)
        api_id = await self.store.create_api(definition)
        logger.info(f"API node ready for {definition.name}", extra={"api": definition.name})

        report = IngestReport(api=definition.name, api_id=api_id, total=len(records))

        for record in records:
            code = natural_key(record)
            try:
                await self._ingest_record(api_id, record)
            except ErrataError as e:
                report.failed += 1
                report.failed_codes.append(code)
                log_error_with_context(
                    logger,
                    f"Failed to ingest {code}: {e}",
                    e,
                    api=definition.name,
                    error_code=code,
                )
                continue

            report.succeeded += 1
            if report.succeeded % PROGRESS_EVERY == 0:
                logger.info(
                    f"Processed {report.succeeded}/{report.total} {definition.name} errors",
                    extra={"api": definition.name},
                )

        logger.info(
            f"Ingested {report.succeeded}/{report.total} {definition.name} error patterns",
            extra={"api": definition.name, "failed": report.failed},
        )
        return report

    async def _ingest_record(self, api_id: str, record: ErrorRecord) -> None:
        code = natural_key(record)

        error_id = await self.store.create_error_pattern(
            api_id=api_id,
            code=code,
            message=record.error_message,
            description=f"{record.error_type}: {record.error_message}",
            resource=record.resource,
            method=record.method or DEFAULT_METHOD,
            http_status=record.http_status or DEFAULT_HTTP_STATUS,
            severity=record.severity.value,
        )

        await self.store.create_solution(
            error_id=error_id,
            title=record.solution_title,
            description=record.solution_description,
            code_example=generate_code_example(record),
            source_url=record.source_url,
            upvotes=calculate_upvotes(record.severity),
        )

        for param in record.params_implicated:
            await self.store.create_parameter(
                error_id=error_id,
                name=param,
                param_type="string",
                required=True,
                description=f"Parameter involved in {code}",
                example=f'"example_{param}"',
            )

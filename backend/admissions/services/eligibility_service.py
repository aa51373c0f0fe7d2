"""Eligibility service orchestrating evaluation, persistence and status updates."""

import logging
from typing import Awaitable, List, Optional, Tuple, TypeVar
from uuid import UUID

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.config import settings
from admissions.core.enums import ApplicationStatus, EligibilityStatus
from admissions.core.exceptions import (
    InternalLogicError,
    NotFoundError,
    ServiceUnavailableError,
)
from admissions.core.workflow import AUTO_DECIDABLE_STATUSES
from admissions.db.base import utcnow
from admissions.models.domain.application import Application
from admissions.models.domain.eligibility import EligibilityResult
from admissions.repositories.application_repository import ApplicationRepository
from admissions.repositories.document_repository import DocumentRepository
from admissions.repositories.eligibility_repository import EligibilityResultRepository
from admissions.repositories.program_repository import ProgramRepository
from admissions.services.eligibility.base import (
    ApplicationSnapshot,
    AutoDecision,
    EvaluationConfig,
    EvaluationOutcome,
    Recommendation,
    Verdict,
)
from admissions.services.eligibility.engine import RuleEngine

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Store failures that mean "unreachable" rather than "bad data"
CONNECTIVITY_ERRORS = (OperationalError, InterfaceError, OSError)


class EligibilityService:
    """
    Eligibility service to orchestrate evaluations.

    This service:
    - Fetches the application, program requirements and approved documents
    - Runs the rule engine on an immutable snapshot
    - Upserts exactly one result per application and commits it
    - Applies or recommends an application status per configuration
    - Maps data-store outages to retryable errors
    """

    def __init__(
        self,
        db: AsyncSession,
        config: Optional[EvaluationConfig] = None,
        application_repo: Optional[ApplicationRepository] = None,
        program_repo: Optional[ProgramRepository] = None,
        document_repo: Optional[DocumentRepository] = None,
        result_repo: Optional[EligibilityResultRepository] = None,
        engine: Optional[RuleEngine] = None,
    ):
        """
        Initialize the eligibility service.

        Args:
            db: Async database session
            config: Engine configuration; built from settings if omitted
            application_repo: Override for the application repository
            program_repo: Override for the program repository
            document_repo: Override for the document repository
            result_repo: Override for the result store
            engine: Override for the rule engine
        """
        self.db = db
        self.application_repo = application_repo or ApplicationRepository(db)
        self.program_repo = program_repo or ProgramRepository(db)
        self.document_repo = document_repo or DocumentRepository(db)
        self.result_repo = result_repo or EligibilityResultRepository(db)
        self.engine = engine or RuleEngine(config or settings.eligibility_config())

    @property
    def config(self) -> EvaluationConfig:
        return self.engine.config

    async def _guarded(self, what: str, operation: Awaitable[T]) -> T:
        """Await a store operation, mapping connectivity failures to ServiceUnavailableError."""
        try:
            return await operation
        except CONNECTIVITY_ERRORS as e:
            logger.error(f"Data store unavailable while {what}: {str(e)}")
            raise ServiceUnavailableError(
                f"Data store unavailable while {what}, please retry"
            ) from e

    async def evaluate(
        self,
        application_id: UUID,
        evaluated_by: str = "system",
    ) -> EligibilityResult:
        """
        Evaluate an application and persist the verdict.

        This is the main orchestration method that:
        1. Fetches the application
        2. Fetches program requirements (defaults if the program has none)
        3. Fetches approved document types
        4. Runs the rule engine
        5. Upserts the result and commits
        6. Applies the configured status outcome (best effort)
        7. Returns the persisted result

        Args:
            application_id: UUID of the application
            evaluated_by: Actor triggering the evaluation ("system" or a staff id)

        Returns:
            The persisted EligibilityResult

        Raises:
            NotFoundError: If the application does not exist
            ServiceUnavailableError: If the data store is unreachable
            InternalLogicError: If the engine fails on fetched inputs
        """
        logger.info(
            f"Evaluating eligibility for application {application_id} "
            f"(evaluated_by={evaluated_by})"
        )

        application = await self._guarded(
            "fetching application",
            self.application_repo.get_by_id(application_id),
        )
        if application is None:
            raise NotFoundError(f"Application with ID {application_id} not found")
        # Rollbacks below expire the instance; read what later steps need now
        current_status = application.status

        requirement = await self._guarded(
            "fetching program requirements",
            self.program_repo.get_requirement(application.program_id),
        )
        if requirement is None:
            logger.warning(
                f"No requirements configured for program {application.program_id}, "
                f"using default eligibility requirements"
            )

        approved_types = await self._guarded(
            "fetching approved documents",
            self.document_repo.find_approved_types(application_id),
        )

        try:
            snapshot = ApplicationSnapshot.from_application(application, self.config.gpa_scale)
            requirements = self.engine.resolve_requirements(application.program_id, requirement)
            verdict = self.engine.evaluate(snapshot, requirements, approved_types)
            outcome = self.engine.derive_outcome(verdict)
        except Exception as e:
            logger.error(
                f"Eligibility engine failed for application {application_id}: {str(e)}",
                exc_info=True,
            )
            raise InternalLogicError(
                f"Eligibility evaluation failed for application {application_id}: {str(e)}"
            ) from e

        result = await self._guarded(
            "saving eligibility result",
            self._save_result(application, verdict, outcome, evaluated_by),
        )

        logger.info(
            f"Eligibility for application {application_id}: {verdict.status.value} "
            f"(score={verdict.score}, policy={verdict.policy.value})"
        )

        if isinstance(outcome, AutoDecision):
            result = await self._apply_decision(
                application, current_status, result, outcome, evaluated_by
            )
        elif isinstance(outcome, Recommendation):
            logger.info(
                f"Recommended status for application {application_id}: "
                f"{outcome.suggested_status.value}"
            )

        return result

    async def _save_result(
        self,
        application: Application,
        verdict: Verdict,
        outcome: Optional[EvaluationOutcome],
        evaluated_by: str,
    ) -> EligibilityResult:
        """Upsert and commit the result, retrying once if a concurrent insert won."""
        application_id = application.id
        fields = dict(
            user_id=application.user_id,
            program_id=application.program_id,
            status=verdict.status,
            eligibility_score=verdict.score,
            policy=verdict.policy,
            recommended_status=self._target_status(outcome),
            criteria_checked=verdict.criteria_checked,
            reasons=list(verdict.reasons),
            evaluated_by=evaluated_by,
            evaluated_at=utcnow(),
        )
        try:
            result = await self.result_repo.upsert(application_id, **fields)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(
                f"Concurrent evaluation detected for application {application_id}, "
                f"overwriting result"
            )
            result = await self.result_repo.upsert(application_id, **fields)
            await self.db.commit()
        return result

    @staticmethod
    def _target_status(outcome: Optional[EvaluationOutcome]):
        if isinstance(outcome, AutoDecision):
            return outcome.new_status
        if isinstance(outcome, Recommendation):
            return outcome.suggested_status
        return None

    async def _apply_decision(
        self,
        application: Application,
        current_status: ApplicationStatus,
        result: EligibilityResult,
        decision: AutoDecision,
        evaluated_by: str,
    ) -> EligibilityResult:
        """
        Set the application status from an automatic decision.

        Only applications under consideration are touched. Failures are logged
        and rolled back; the committed result is unaffected.

        Args:
            application: The evaluated application (may be expired by a rollback)
            current_status: Status read before any rollback
            result: The committed result
            decision: Target status
            evaluated_by: Actor recorded as reviewer
        """
        application_id = result.application_id
        if current_status not in AUTO_DECIDABLE_STATUSES:
            logger.warning(
                f"Skipping automatic status update for application {application_id}: "
                f"status '{current_status.value}' cannot be auto-decided"
            )
            return result
        if current_status == decision.new_status:
            return result

        try:
            await self.application_repo.update_status(
                application,
                decision.new_status,
                reviewed_at=utcnow(),
                reviewed_by=evaluated_by,
            )
            await self.db.commit()
        except Exception as e:
            logger.warning(
                f"Automatic status update failed for application {application_id}: {str(e)}",
                exc_info=True,
            )
            await self.db.rollback()
            # Rollback expires loaded instances; reload the committed result
            return await self._guarded(
                "reloading eligibility result",
                self.result_repo.get_by_application(application_id),
            )

        logger.info(
            f"Application {application_id} status changed automatically: "
            f"{current_status.value} -> {decision.new_status.value}"
        )
        return result

    async def get_result(self, application_id: UUID) -> EligibilityResult:
        """
        Retrieve the stored result for an application.

        Raises:
            NotFoundError: If the application was never evaluated
        """
        result = await self._guarded(
            "fetching eligibility result",
            self.result_repo.get_by_application(application_id),
        )
        if result is None:
            raise NotFoundError(
                f"Eligibility result not found for application {application_id}"
            )
        return result

    async def get_user_results(self, user_id: UUID) -> List[EligibilityResult]:
        """Results for all of a user's applications, most recent first."""
        return await self._guarded(
            "fetching eligibility results",
            self.result_repo.get_by_user(user_id),
        )

    async def list_results(
        self,
        status: Optional[EligibilityStatus] = None,
        program_id: Optional[UUID] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[EligibilityResult], int]:
        """
        List results for staff with optional filters.

        Args:
            status: Restrict to one verdict
            program_id: Restrict to one program
            page: Page number (1-indexed)
            limit: Page size

        Returns:
            Tuple of (results on the page, total matching results)
        """
        skip = (page - 1) * limit
        items = await self._guarded(
            "listing eligibility results",
            self.result_repo.list_results(
                status=status, program_id=program_id, skip=skip, limit=limit
            ),
        )
        total = await self._guarded(
            "counting eligibility results",
            self.result_repo.count_results(status=status, program_id=program_id),
        )
        return items, total

    def get_requirements(self) -> dict:
        """Describe the configured eligibility rules."""
        return self.engine.describe_requirements()

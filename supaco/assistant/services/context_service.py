"""
Context Service

Builds the bounded snapshot of a user's business data that grounds the
assistant's answers: recent projects and prospects, pipeline statistics and
upcoming deadlines.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from core.utils.logging_config import get_logger
from ..config import AssistantConfig, get_config

logger = get_logger('supaco.assistant.context')

NOT_SET = 'Not set'
NO_DEADLINE = 'No deadline'
NOT_PROVIDED = 'Not provided'

# Shared by every request; each query borrows its own pooled connection
_context_pool = ThreadPoolExecutor(max_workers=5, thread_name_prefix='assistant-context')


def format_currency(value: Any, symbol: str = '€', empty: Optional[str] = NOT_SET) -> str:
    """1500 -> '1500€', Decimal('1500.50') -> '1500.50€'.

    Falsy amounts render as `empty` unless empty is None, in which case
    they render as zero.
    """
    if not value:
        if empty is not None:
            return empty
        value = 0
    amount = Decimal(str(value))
    if amount == amount.to_integral_value():
        return f'{int(amount)}{symbol}'
    return f'{amount:.2f}{symbol}'


def format_date(value: Any, date_format: str = '%d/%m/%Y', empty: str = NO_DEADLINE) -> str:
    """Render a date (or ISO date string) with date_format."""
    if not value:
        return empty
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    return value.strftime(date_format)


class ContextService:
    """Assemble the per-turn context snapshot for one user."""

    def __init__(
        self,
        project_repo=None,
        prospect_repo=None,
        config: Optional[AssistantConfig] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        if project_repo is None or prospect_repo is None:
            from crm.repositories import ProjectRepository, ProspectRepository
            project_repo = project_repo or ProjectRepository()
            prospect_repo = prospect_repo or ProspectRepository()
        self.project_repo = project_repo
        self.prospect_repo = prospect_repo
        self.config = config or get_config()

        self._executor = executor or _context_pool

    def get_user_context(self, user_id: int) -> Optional[Dict[str, Any]]:
        """
        Build the context snapshot for user_id.

        Returns:
            {'projects', 'prospects', 'statistics', 'upcoming_deadlines'}, or
            None when any underlying query fails (never partial data).
        """
        cfg = self.config
        futures = {
            'projects': self._executor.submit(
                self.project_repo.get_recent, user_id, cfg.CONTEXT_PROJECT_LIMIT),
            'prospects': self._executor.submit(
                self.prospect_repo.get_recent, user_id, cfg.CONTEXT_PROSPECT_LIMIT),
            'project_stats': self._executor.submit(self.project_repo.get_stats, user_id),
            'prospect_stats': self._executor.submit(self.prospect_repo.get_stats, user_id),
            'deadlines': self._executor.submit(
                self.project_repo.get_upcoming_deadlines, user_id, cfg.CONTEXT_DEADLINE_LIMIT),
        }

        try:
            rows = {key: future.result() for key, future in futures.items()}
            return {
                'projects': [self._project_entry(p) for p in rows['projects']],
                'prospects': [self._prospect_entry(p) for p in rows['prospects']],
                'statistics': self._statistics(rows['project_stats'], rows['prospect_stats']),
                'upcoming_deadlines': [self._deadline_entry(d) for d in rows['deadlines']],
            }
        except Exception as e:
            logger.error(f"Context aggregation failed for user {user_id}: {e}", exc_info=True)
            for future in futures.values():
                future.cancel()
            return None

    def _project_entry(self, project: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'id': project['id'],
            'name': project['name'],
            'client': project['client_name'],
            'status': project['status'],
            'budget': format_currency(project.get('budget'), self.config.CURRENCY_SYMBOL),
            'deadline': format_date(project.get('deadline'), self.config.DATE_FORMAT),
        }

    def _prospect_entry(self, prospect: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'id': prospect['id'],
            'name': f"{prospect['first_name']} {prospect['last_name']}",
            'company': prospect.get('company') or NOT_PROVIDED,
            'status': prospect['status'],
            'estimated_budget': format_currency(
                prospect.get('estimated_budget'), self.config.CURRENCY_SYMBOL),
            'source': prospect.get('source'),
        }

    def _deadline_entry(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'project': row['name'],
            'client': row['client_name'],
            'date': format_date(row['deadline'], self.config.DATE_FORMAT),
        }

    def _statistics(self, project_stats: Optional[Dict], prospect_stats: Optional[Dict]) -> Dict[str, Any]:
        project_stats = project_stats or {}
        prospect_stats = prospect_stats or {}
        return {
            'projects': {
                'total': int(project_stats.get('total') or 0),
                'quote': int(project_stats.get('quote') or 0),
                'in_progress': int(project_stats.get('in_progress') or 0),
                'completed': int(project_stats.get('completed') or 0),
                'total_budget': format_currency(
                    project_stats.get('total_budget'), self.config.CURRENCY_SYMBOL, empty=None),
            },
            'prospects': {
                'total': int(prospect_stats.get('total') or 0),
                'new': int(prospect_stats.get('new') or 0),
                'won': int(prospect_stats.get('won') or 0),
                'lost': int(prospect_stats.get('lost') or 0),
            },
        }


def empty_context() -> Dict[str, List]:
    """Sections used in the prompt when no snapshot is available."""
    return {'projects': [], 'prospects': [], 'statistics': {}, 'upcoming_deadlines': []}

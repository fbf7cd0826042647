"""Quick insights and starter questions shown when the chat opens."""

from typing import Any, Dict, List, Optional

from .context_service import ContextService

SUGGESTED_QUESTIONS = [
    "Create a project for a new client",
    "Add a prospect",
    "What are my upcoming deadlines?",
    "Summarize my activity",
    "Change the status of a project",
]


class SuggestionService:

    def __init__(self, context_service: Optional[ContextService] = None):
        self._context_service = context_service

    @property
    def context_service(self) -> ContextService:
        if self._context_service is None:
            self._context_service = ContextService()
        return self._context_service

    def get_suggestions(self, user_id: int) -> Dict[str, List[str]]:
        """Insights only list non-zero counts; an unavailable snapshot yields none."""
        context = self.context_service.get_user_context(user_id)
        return {
            'insights': build_insights(context),
            'questions': list(SUGGESTED_QUESTIONS),
        }


def build_insights(context: Optional[Dict[str, Any]]) -> List[str]:
    if not context:
        return []

    stats = context.get('statistics') or {}
    insights = []

    new_prospects = (stats.get('prospects') or {}).get('new', 0)
    if new_prospects > 0:
        insights.append(f"You have {new_prospects} new prospect(s) to contact")

    deadlines = context.get('upcoming_deadlines') or []
    if deadlines:
        insights.append(f"{len(deadlines)} deadline(s) in the coming days")

    in_progress = (stats.get('projects') or {}).get('in_progress', 0)
    if in_progress > 0:
        insights.append(f"{in_progress} project(s) in progress")

    return insights

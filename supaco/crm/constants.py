"""Status and category tokens stored in the CRM tables."""

PROJECT_STATUSES = ('quote', 'in_progress', 'completed', 'cancelled')
PROJECT_INITIAL_STATUS = 'quote'
PROJECT_DONE_STATUS = 'completed'

PROSPECT_STATUSES = ('new', 'contacted', 'qualification', 'proposal', 'negotiation', 'won', 'lost')
PROSPECT_INITIAL_STATUS = 'new'
PROSPECT_WON_STATUS = 'won'

PROSPECT_SOURCES = ('website', 'referral', 'linkedin', 'trade_show', 'other')
PROSPECT_DEFAULT_SOURCE = 'other'

TASK_INITIAL_STATUS = 'todo'
TASK_PRIORITIES = ('low', 'medium', 'high')
TASK_DEFAULT_PRIORITY = 'medium'


def like_pattern(term):
    """Build an ILIKE substring pattern, escaping the LIKE wildcards in term."""
    escaped = term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return f'%{escaped}%'

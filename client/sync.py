"""
Replay of locally saved submissions once the server is reachable again.
"""

import logging
from collections import namedtuple
from utils.errors import SubmissionRejected, TransportError
from utils.validation import required_fields


logger = logging.getLogger(__name__)

ReplayReport = namedtuple('ReplayReport', ['sent', 'rejected', 'remaining'])


def replay_fallback(api, fallback, kind):
    """
    Resubmit local records in order, removing each one the server confirms.

    A record the server refuses is moved to the rejected list and the replay
    carries on with the next one. Any other transport failure stops the
    replay so the remaining records keep their order for the next attempt.
    """
    confirmed = []
    refused = {}
    pending = fallback.entries(kind)
    for record in pending:
        record_id = record.get('id')
        payload = {field: record.get(field, '') for field in required_fields(kind)}
        try:
            api.submit(kind, payload)
        except SubmissionRejected as e:
            logger.warning("Server refused %s %s, setting it aside: %s", kind, record_id, e)
            refused[record_id] = str(e)
            continue
        except TransportError as e:
            logger.warning("Replay of %s %s stopped: %s", kind, record_id, e)
            break
        confirmed.append(record_id)

    if confirmed:
        fallback.remove(kind, confirmed)
        logger.info("Replayed %d local %s submission(s)", len(confirmed), kind)
    if refused:
        fallback.reject(kind, list(refused), reasons=refused)
    return ReplayReport(
        sent=len(confirmed),
        rejected=len(refused),
        remaining=len(pending) - len(confirmed) - len(refused),
    )

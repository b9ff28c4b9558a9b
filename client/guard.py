"""
Auth guard for protected routes.

Every navigation to a protected path asks the backend whether the token is
still accepted, so expired or revoked tokens are caught on the next route
change instead of on the next failing API call.
"""
import functools
import logging


logger = logging.getLogger(__name__)


def protected_route(handler, session, router, toaster=None):
    """Wrap *handler* so it only runs for a verified session.

    Unauthenticated navigations are redirected to the login path and the
    handler is not invoked.
    """
    @functools.wraps(handler)
    def guarded(container):
        generation = router.generation
        if not session.require_auth(router):
            if toaster is not None and session.last_error:
                toaster.error(session.last_error)
            return None
        if router.generation != generation:
            logger.debug('Navigation moved on while verifying, skipping %s',
                         getattr(handler, '__qualname__', handler))
            return None
        return handler(container)

    guarded.is_protected = True
    return guarded

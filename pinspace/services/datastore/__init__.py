"""
Relational datastore for user accounts and follow edges.

Uniqueness is enforced here rather than by the callers: ``users.email`` and
``users.username`` carry unique indexes, and ``follows`` is keyed on the
(follower, following) pair. Callers treat the resulting
:class:`sqlalchemy.exc.IntegrityError` as the authoritative conflict signal.
"""

from . import models, util
from .models import db, DBUser, DBFollow

init_app = util.init_app
create_all = util.create_all
transaction = util.transaction

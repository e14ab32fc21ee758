from .policy import Action, available_actions, can_act_on, can_re_invite, status_label
from .engine import DeleteResult, LifecycleEngine
from .cache import CacheKey, cache_key_for, on_assignment_deleted
from .confirmation import DeleteConfirmation, DeleteState, EditSession
from .controller import MyUsersController

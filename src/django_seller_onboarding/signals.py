from django.dispatch import Signal

# Signal arguments: registry, definition
definition_registered = Signal()

# Signal arguments: registry, slug
definition_unregistered = Signal()

# Signal arguments: registry
registry_reloaded = Signal()

# Signal arguments: user_id, step_id, seller_type
step_completed = Signal()

# Signal arguments: user_id, seller_type, version
onboarding_completed = Signal()

# Signal arguments: user_id, reason
onboarding_reset = Signal()

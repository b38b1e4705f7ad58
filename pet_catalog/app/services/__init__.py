"""
Service layer.

``pet_store`` owns the ``pets`` table, ``pet_provider`` is the
address-based gateway in front of it and ``change_notifier`` carries
change notifications from the gateway to observers.
"""

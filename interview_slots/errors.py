class SeedError(Exception):
    pass


class ConfigError(SeedError):
    """Seeding parameters that cannot describe a valid slot grid."""


class StoreConnectionError(SeedError):
    """Slot table unreachable when the seeder starts."""


class PersistenceError(SeedError):
    """The store rejected a clear or a batch write."""


class DuplicateSlotError(PersistenceError):
    def __init__(self, slot_numbers):
        self.slot_numbers = sorted(slot_numbers)
        super().__init__(f"Duplicate slotNumber in batch: {self.slot_numbers}")

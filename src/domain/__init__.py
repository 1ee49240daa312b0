"""Domain layer - Pure business logic.

Connection entity, lifecycle enums, transition value object, typed errors
and the ports (protocols) the application layer depends on. The domain
layer has NO dependencies on any framework or infrastructure.

Structure:
- entities/: Domain entities (mutable, have identity)
- value_objects/: Value objects (immutable, no identity)
- enums/: States, actions, access levels, actor roles
- errors/: Typed failures carried by Result
- protocols/: Ports (repository interface, logger interface)
"""

"""Domain layer - Pure business logic.

Structure:
- entities/: Principal and RiskAssessment
- value_objects/: GeoPoint, DeviceFingerprint, RequestContext
- events/: Security events recorded in the ledger
- errors/: Error values carried in Failure
- protocols/: Ports implemented by infrastructure adapters

The domain layer has NO dependencies on any framework or infrastructure.
"""

from tierpass.services.platform import TierPassService, create_service

__all__ = ["TierPassService", "create_service"]

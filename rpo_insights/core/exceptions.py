# custom exception 정의 및 관리


class RPOInsightsException(Exception):  # 예외 구조 정의
    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class ScenarioUnresolvableException(RPOInsightsException):
    def __init__(
        self, message: str = "Could not retrieve data. Please check Scenario Name."
    ):
        super().__init__(message, code="SCENARIO_UNRESOLVABLE")


class SheetNotFoundException(RPOInsightsException):
    def __init__(self, message: str = "Sheet not found. Check the ID."):
        super().__init__(message, code="SHEET_NOT_FOUND")


class SheetPermissionException(RPOInsightsException):
    def __init__(
        self,
        message: str = "Permission denied. Ensure the Sheet is 'Anyone with the link can view'.",
    ):
        super().__init__(message, code="SHEET_PERMISSION_DENIED")


class SheetFetchException(RPOInsightsException):
    def __init__(self, message: str = "Failed to fetch sheet data."):
        super().__init__(message, code="SHEET_FETCH_FAILED")

from fastapi import HTTPException, status


class DuplicateAccount(HTTPException):
    def __init__(self, detail: str = "Email already registered"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class OtpAlreadyPending(HTTPException):
    def __init__(self, detail: str = "OTP already sent"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidOrExpiredOtp(HTTPException):
    def __init__(self, detail: str = "Invalid or expired OTP"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class MissingField(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class AlreadySubmitted(HTTPException):
    def __init__(self, detail: str = "Aadhaar already submitted for this user"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class DuplicateAadhaarNumber(HTTPException):
    def __init__(self, detail: str = "Aadhaar number already exists in the system"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class MissingCoordinates(HTTPException):
    def __init__(self, detail: str = "Latitude and longitude are required."):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class Unauthorized(HTTPException):
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class InvalidCredentials(HTTPException):
    def __init__(self, detail: str = "Invalid username or password"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class Forbidden(HTTPException):
    def __init__(self, detail: str = "Admin access required"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class BadRequest(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

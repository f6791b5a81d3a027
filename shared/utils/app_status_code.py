class AppStatusCode:
    # Success
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    CREATED_SUCCESSFULLY = "101"
    UPDATED_SUCCESSFULLY = "102"
    DELETED_SUCCESSFULLY = "103"

    # Validation
    INVALID_INPUT = "200"
    REQUIRED_VALIDATION_ERROR = "201"
    DUPLICATE_ADD_ERROR = "202"
    USER_USERNAME_IS_UNIQUE = "203"

    # Lookup
    NOT_FOUND = "300"

    # Authentication / authorization
    AUTHENTICATION_TOKEN_INVALID = "400"
    AUTHENTICATION_TOKEN_EXPIRED = "401"
    AUTHENTICATION_CREDENTIALS_INVALID = "402"
    AUTHENTICATION_USER_INVALID = "403"
    AUTHORIZATION_FORBIDDEN = "404"

    # Server
    OPERATION_FAILED = "500"
    OPERATION_ERROR = "501"

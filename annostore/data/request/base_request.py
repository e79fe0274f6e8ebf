class Request:
    pass


class InvalidRequest(Request):
    def __init__(self):
        self.errors = []

    def add_error(self, parameter, message):
        self.errors.append({"parameter": parameter, "message": message})

    def has_errors(self):
        return len(self.errors) > 0

    def __bool__(self):
        return False


class ValidRequest(Request):
    def __bool__(self):
        return True


def check_document(parameter, document, invalid_req: InvalidRequest):
    if document is None:
        invalid_req.add_error(parameter=parameter, message="Missing document.")
    elif not isinstance(document, dict):
        invalid_req.add_error(
            parameter=parameter,
            message=f"Expects {dict} but received {type(document)}",
        )


def check_identifier(parameter, identifier, invalid_req: InvalidRequest):
    if not identifier:
        invalid_req.add_error(parameter=parameter, message="Missing identifier.")
    elif not isinstance(identifier, str):
        invalid_req.add_error(
            parameter=parameter,
            message=f"Expects {str} but received {type(identifier)}",
        )

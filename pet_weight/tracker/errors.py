"""表单输入错误。"""

PET_FORM_MESSAGE = "Please fill in all fields correctly."
WEIGHT_FORM_MESSAGE = "Please enter a valid weight."


class InvalidInputError(ValueError):
    """必填项为空或体重不合法；message 直接展示给用户。"""

    def __init__(self, message: str, field: str = ""):
        super().__init__(message)
        self.field = field

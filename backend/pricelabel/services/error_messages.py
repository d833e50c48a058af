"""
Дружелюбные сообщения об ошибках.

Вместо технических сообщений пользователь видит понятные подсказки.
Тексты на английском — их показывает панель администратора магазина.
"""


class FriendlyError:
    """Человекопонятная ошибка с подсказкой."""

    def __init__(self, message: str, hint: str | None = None, details: str | None = None):
        self.message = message
        self.hint = hint
        self.details = details  # Техническая инфа для поддержки

    def to_dict(self) -> dict:
        result = {"message": self.message}
        if self.hint:
            result["hint"] = self.hint
        if self.details:
            result["details"] = self.details
        return result


# === Ошибки входных данных ===

NO_PRODUCTS = FriendlyError(
    message="No products provided",
    hint="Select at least one product to print price labels for",
)


def too_many_labels_error(label_count: int, limit: int) -> FriendlyError:
    """Слишком много этикеток за одну печать."""
    return FriendlyError(
        message=f"Too many labels: {label_count} requested, maximum is {limit}",
        hint="Split the print job or reduce label quantities",
        details=f"label_count={label_count}, limit={limit}",
    )


def unknown_format_error(format_id: str) -> FriendlyError:
    """Формат этикетки не найден в каталоге."""
    return FriendlyError(
        message=f"Unknown label format: {format_id}",
        hint="Use one of: thermal_78x25, standard_30, large_10, shelf_80, custom",
    )


def invalid_format_error(reason: str) -> FriendlyError:
    """Пользовательский формат нарушает инварианты."""
    return FriendlyError(
        message="Invalid custom label format",
        hint="Labels per row and rows per page must be at least 1",
        details=reason,
    )


# === Внутренние ошибки ===


def internal_error(error: Exception) -> FriendlyError:
    """Непредвиденная ошибка при сборке документа."""
    return FriendlyError(
        message=str(error) or error.__class__.__name__,
        hint="Check product data (prices, quantities) and try again",
        details=error.__class__.__name__,
    )

"""Утилиты для работы с именами"""

import keyword


def capitalize_first(value: str) -> str:
    """Первая буква в верхний регистр, остаток без изменений

    Examples:
        >>> capitalize_first("orderId")
        'OrderId'
        >>> capitalize_first("")
        ''
    """
    return value[:1].upper() + value[1:]


def clean_identifier(name: str) -> str:
    """
    Очистка имени для использования как идентификатор Python.

    Спецсимволы заменяются подчеркиваниями, к ключевым словам добавляется
    подчеркивание в конце.

    Examples:
        >>> clean_identifier("X-Request-Id")
        'X_Request_Id'
        >>> clean_identifier("from")
        'from_'
        >>> clean_identifier("2fa")
        'param_2fa'
    """
    name = "".join(c if c.isalnum() or c == "_" else "_" for c in name)
    # Убираем множественные подчеркивания
    while "__" in name:
        name = name.replace("__", "_")
    name = name.strip("_")

    if name and name[0].isdigit():
        name = f"param_{name}"
    if not name:
        name = "param"

    if keyword.iskeyword(name):
        name = f"{name}_"

    return name

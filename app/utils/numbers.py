"""
Helpers numéricos compartilhados pelo validador e pelo conversor
"""
from typing import Any, Optional


def as_whole_number(value: Any) -> Optional[int]:
    """
    Retorna value como int se for um número inteiro (5 ou 5.0), None caso contrário.

    bool é rejeitado mesmo sendo subclasse de int; 2.5, NaN, inf, strings e
    None também retornam None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None

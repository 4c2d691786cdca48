"""
Core: битовые примитивы, модели дробей и контракты сериализации.

Не зависит от внешних систем; все вычисления чистые и синхронные.
"""

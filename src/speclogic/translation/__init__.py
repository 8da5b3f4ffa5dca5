"""speclogic Translation — backend-specific passes over specification trees."""

from speclogic.translation.mongo import MongoTranslationProperties, MongoTranslator
from speclogic.translation.port import TranslatorPort, expression_of
from speclogic.translation.sqlalchemy import SqlAlchemyTranslator

__all__ = [
    "MongoTranslationProperties",
    "MongoTranslator",
    "SqlAlchemyTranslator",
    "TranslatorPort",
    "expression_of",
]

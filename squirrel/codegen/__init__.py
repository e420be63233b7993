from squirrel.codegen.codegen import codegen
from squirrel.codegen.serializer import serialize

__all__ = ["codegen", "serialize"]

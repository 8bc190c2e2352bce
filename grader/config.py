from __future__ import annotations
from pathlib import Path

# Assignment under test, relative to the student's project root
DEFAULT_SOURCE_PATH = Path("src/main/java/com/yaksha/assignment/EncapsulationAbstractClassAssignment.java")

BASE_CLASS = "Animal"
FIRST_DERIVED_CLASS = "Dog"
SECOND_DERIVED_CLASS = "Cat"

ABSTRACT_METHOD = "speak"
PRIVATE_FIELD = "name"
GETTER_METHOD = "getName"
SETTER_METHOD = "setName"

ENTRY_POINT_METHOD = "main"
BEHAVIOR_METHOD = "speak"

PASS_MESSAGE = "Test passed: Encapsulation and Abstract classes/methods are correctly implemented."

"""Marker names and rule identity for the thread-safety linter."""

RULE_CODE = "W9701"
RULE_SYMBOL = "instance-variable-in-class-method"
RULE_MESSAGE = "Avoid instance variables in class methods."
RULE_DESCRIPTION = (
    "Instance variables read or written in class-level methods are shared by "
    "every caller of the class. Guard them with Mutex#synchronize or keep the "
    "state per instance."
)

CONFIG_SECTION = "thread-safety-linter"

# Module name whose direct definitions become class methods (ActiveSupport::Concern).
CLASS_METHODS_MODULE = "ClassMethods"
CLASS_METHODS_BLOCK = "class_methods"
MODULE_FUNCTION = "module_function"
DEFINE_METHOD = "define_method"
DEFINE_SINGLETON_METHOD = "define_singleton_method"
SYNCHRONIZE = "synchronize"

IVAR_GET = "instance_variable_get"
IVAR_SET = "instance_variable_set"
# Reflection call -> number of arguments it takes.
IVAR_REFLECTION_ARITY: dict[str, int] = {IVAR_GET: 1, IVAR_SET: 2}

INSTANCE_MARKER = "@"
CLASS_VARIABLE_MARKER = "@@"

SEXP_SUFFIXES = (".sexp", ".ast", ".txt")
JSON_SUFFIXES = (".json",)

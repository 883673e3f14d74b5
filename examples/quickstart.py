"""Quickstart example for faultcodes.

This example demonstrates fault codes with default formats, codes that
have no template at all, and branching on the code of a caught error.
"""

from datetime import date
from enum import auto

from faultcodes import FaultError, LocalizedFaultCode, resolve


# Example 1: Codes with default formats
print("=" * 50)
print("Example 1: Default Formats")
print("=" * 50)


class ExampleError(FaultError):
    class Code(LocalizedFaultCode):
        ERROR_1 = "Error with one argument: {0}"
        ERROR_2 = "Error with two arguments: {0}, {1}"
        ERROR_3 = auto()

    code_type = Code


error = ExampleError(ExampleError.Code.ERROR_1, "42")
print(error)
# Output: Error with one argument: 42

print(ExampleError(ExampleError.Code.ERROR_2, "a", "b"))
# Output: Error with two arguments: a, b

# Example 2: Codes without any template
print("\n" + "=" * 50)
print("Example 2: Codes Without Templates")
print("=" * 50)

print(ExampleError(ExampleError.Code.ERROR_3, "a", "b", "c"))
# Output: ERROR_3 [a, b, c]

print(ExampleError(ExampleError.Code.ERROR_3))
# Output: ERROR_3

# Example 3: Branching on the code
print("\n" + "=" * 50)
print("Example 3: Programmatic Branching")
print("=" * 50)

try:
    raise ExampleError(ExampleError.Code.ERROR_2, "x", "y", cause=KeyError("x"))
except ExampleError as e:
    match e.code:
        case ExampleError.Code.ERROR_2:
            print(f"handled {e.code.name} with args {e.message_args}, caused by {e.__cause__!r}")
        case _:
            raise
# Output: handled ERROR_2 with args ('x', 'y'), caused by KeyError('x')

# Example 4: Typed placeholders
print("\n" + "=" * 50)
print("Example 4: Number, Date and Choice Placeholders")
print("=" * 50)


class ReportCode(LocalizedFaultCode):
    QUOTA = "Quota of {0,number,integer} bytes exceeded on {1,date,long}"
    FILES = "{0,choice,0#No files|1#One file|1<{0,number,integer} files} rejected"


print(resolve(ReportCode.QUOTA, 1048576, date(2024, 3, 15), locale="en_US"))
# Output: Quota of 1,048,576 bytes exceeded on March 15, 2024

print(resolve(ReportCode.QUOTA, 1048576, date(2024, 3, 15), locale="de_DE"))
# Output: Quota of 1.048.576 bytes exceeded on 15. März 2024

for count in (0, 1, 1500):
    print(ReportCode.FILES.get_message(count, locale="en_US"))
# Output:
# No files rejected
# One file rejected
# 1,500 files rejected

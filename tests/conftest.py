"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def simple_diff():
    """Single-file diff replacing the second of three lines."""
    return """diff --git a/letters.txt b/letters.txt
index 1234567..abcdefg 100644
--- a/letters.txt
+++ b/letters.txt
@@ -1,2 +1,2 @@
 a
-b
+x
"""


@pytest.fixture
def ten_lines():
    """Content of a 10-line file."""
    return "".join(f"{n}\n" for n in range(1, 11))


@pytest.fixture
def multi_hunk_diff():
    """Diff with two disjoint hunks for a 10-line file."""
    return """diff --git a/numbers.txt b/numbers.txt
index 1111111..2222222 100644
--- a/numbers.txt
+++ b/numbers.txt
@@ -2,3 +2,3 @@ first
 2
-3
+three
 4
@@ -7,3 +7,4 @@ second
 7
+seven and a half
 8
 9
"""


@pytest.fixture
def rust_diff():
    """Real git diff with two hunks, blank context lines and trailing text."""
    lines = [
        "diff --git a/tests/vm.rs b/tests/vm.rs",
        "index 90d5af1..30044cb 100644",
        "--- a/tests/vm.rs",
        "+++ b/tests/vm.rs",
        "@@ -16,7 +16,9 @@ fn run_vm_test(tests: Tests<Option<Object>>) {",
        "         let program = Parser::new(lexer).parse().unwrap();",
        " ",
        "         let mut comp = Compiler::create().unwrap();",
        "-        comp.compile(program);",
        "+        if let Err(e) = comp.compile(program) {",
        '+            panic!("Compile error {:?}", e);',
        "+        }",
        "         let bytecode = comp.bytecode().unwrap();",
        " ",
        '         println!("Bytecode\\n{}", bytecode.to_string());',
        "@@ -25,7 +27,7 @@ fn run_vm_test(tests: Tests<Option<Object>>) {",
        " ",
        "         while vm.is_runable() {",
        "             if let Err(err) = vm.run_single() {",
        '-                eprintln!("Error {:?}", err);',
        '+                panic!("VmError {:?}", err)',
        "             }",
        "         }",
        '         println!("VM STACK:\\n {}", vm.stack_to_string());',
    ]
    return "\n".join(lines) + "\n"


@pytest.fixture
def two_file_diff():
    """Diff touching two files."""
    return """diff --git a/first.txt b/first.txt
--- a/first.txt
+++ b/first.txt
@@ -1,1 +1,1 @@
-one
+ONE
diff --git a/sub/second.txt b/sub/second.txt
index aaaaaaa..bbbbbbb 100644
--- a/sub/second.txt
+++ b/sub/second.txt
@@ -1,2 +1,3 @@
 alpha
+beta
 gamma
"""

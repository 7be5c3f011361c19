# tests/conftest.py
import pytest


SCENARIO_A_DIFF = """diff --git a/src/a.ts b/src/a.ts
index 1111111..2222222 100644
--- a/src/a.ts
+++ b/src/a.ts
@@ -8,3 +8,4 @@ export function f() {
 const a = 1;
 const b = 2;
+console.log('x')
 return a + b;
"""

README_DIFF = """diff --git a/README.md b/README.md
index 3333333..4444444 100644
--- a/README.md
+++ b/README.md
@@ -1,2 +1,3 @@
 # Project
+More docs.
 
"""

DELETED_FILE_DIFF = """diff --git a/old.py b/old.py
deleted file mode 100644
index 5555555..0000000
--- a/old.py
+++ /dev/null
@@ -1,2 +0,0 @@
-print('a')
-print('b')
"""

MIXED_DIFF = """diff --git a/src/main.py b/src/main.py
index 6666666..7777777 100644
--- a/src/main.py
+++ b/src/main.py
@@ -11,4 +11,5 @@ def hello():
     print("hello")
-    print("world")
+    print("World")
+    return True
 
 def goodbye():
"""

RENAMED_DIFF = """diff --git a/lib/old_name.py b/lib/new_name.py
similarity index 90%
rename from lib/old_name.py
rename to lib/new_name.py
index 8888888..9999999 100644
--- a/lib/old_name.py
+++ b/lib/new_name.py
@@ -1 +1 @@
-x = 1
+x = 2
"""

TRUNCATED_DIFF = """diff --git a/src/broken.py b/src/broken.py
index aaaaaaa..bbbbbbb 100644
--- a/src/broken.py
+++ b/src/broken.py
@@ -1,3 +1,3 @@
 first
this line is garbage
"""


@pytest.fixture
def scenario_a_diff():
    return SCENARIO_A_DIFF


@pytest.fixture
def readme_diff():
    return README_DIFF


@pytest.fixture
def deleted_file_diff():
    return DELETED_FILE_DIFF


@pytest.fixture
def mixed_diff():
    return MIXED_DIFF


@pytest.fixture
def renamed_diff():
    return RENAMED_DIFF


@pytest.fixture
def truncated_diff():
    return TRUNCATED_DIFF

"""Tests for the gradle.lockfile parser."""

from __future__ import annotations

from gradlelock.engines.lock_updater.models import DependencyCoordinate
from gradlelock.engines.lock_updater.parser import (
    is_comment,
    parse_configurations,
    parse_coordinate,
    parse_lock_file,
)

GRADLE_HEADER = (
    "# This is a Gradle generated file for dependency locking.\n"
    "# Manual edits can break the build and are not advised.\n"
    "# This file is expected to be part of source control.\n"
)


class TestLineHelpers:
    def test_comment_requires_space(self):
        assert is_comment("# hello")
        assert not is_comment("#hello")
        assert not is_comment(" # hello")

    def test_configurations_trimmed_and_empties_dropped(self):
        assert parse_configurations("g:a:1= api , ,runtime,") == {"api", "runtime"}

    def test_configurations_without_separator(self):
        assert parse_configurations("g:a:1") == set()

    def test_configurations_with_two_separators(self):
        assert parse_configurations("g:a:1=api=runtime") == set()

    def test_coordinate(self):
        assert parse_coordinate("com.foo:bar:1.0=api") == DependencyCoordinate(
            "com.foo", "bar", "1.0"
        )

    def test_coordinate_wrong_part_count(self):
        assert parse_coordinate("com.foo:bar=api") is None
        assert parse_coordinate("com.foo:bar:1.0:jdk8=api") is None

    def test_empty_is_not_a_coordinate(self):
        assert parse_coordinate("empty=api") is None


class TestParseLockFile:
    def test_typical_file(self):
        text = (
            GRADLE_HEADER
            + "com.google.guava:guava:32.1.2-jre=compileClasspath,runtimeClasspath\n"
            + "org.slf4j:slf4j-api:2.0.9=runtimeClasspath\n"
            + "empty=annotationProcessor,testCompileClasspath\n"
        )
        parsed = parse_lock_file(text)

        assert parsed.comments == GRADLE_HEADER.splitlines()
        assert parsed.locked == {
            DependencyCoordinate("com.google.guava", "guava", "32.1.2-jre"): {
                "compileClasspath",
                "runtimeClasspath",
            },
            DependencyCoordinate("org.slf4j", "slf4j-api", "2.0.9"): {"runtimeClasspath"},
        }
        assert parsed.previous_empty == {"annotationProcessor", "testCompileClasspath"}
        assert parsed.locked_configuration_names == {
            "compileClasspath",
            "runtimeClasspath",
            "annotationProcessor",
            "testCompileClasspath",
        }

    def test_comment_order_preserved(self):
        text = "# b\ng:a:1=api\n# a\nempty=\n"
        assert parse_lock_file(text).comments == ["# b", "# a"]

    def test_blank_lines_ignored(self):
        parsed = parse_lock_file("\n\n   \ng:a:1=api\n\nempty=\n")
        assert parsed.locked == {DependencyCoordinate("g", "a", "1"): {"api"}}
        assert parsed.previous_empty == set()

    def test_malformed_lines_dropped(self):
        text = (
            "garbage\n"
            "g:a=api\n"
            "g:a:1:x=api\n"
            "g:a:1=api=runtime\n"
            "#nospace=api\n"
            "g:b:2=runtime\n"
        )
        parsed = parse_lock_file(text)
        assert parsed.comments == []
        assert parsed.locked == {DependencyCoordinate("g", "b", "2"): {"runtime"}}
        assert parsed.locked_configuration_names == {"runtime"}

    def test_duplicate_coordinate_lines_merge(self):
        parsed = parse_lock_file("g:a:1=api\ng:a:1=runtime\n")
        assert parsed.locked == {DependencyCoordinate("g", "a", "1"): {"api", "runtime"}}

    def test_coordinate_without_configurations(self):
        parsed = parse_lock_file("g:a:1=\n")
        assert parsed.locked == {DependencyCoordinate("g", "a", "1"): set()}
        assert parsed.locked_configuration_names == set()

    def test_never_raises_on_binary_noise(self):
        parsed = parse_lock_file("\x00\x01=\x02\n===\n:::\n")
        assert parsed.locked == {}

    def test_empty_text(self):
        parsed = parse_lock_file("")
        assert parsed.comments == []
        assert parsed.locked == {}
        assert parsed.previous_empty == set()

    def test_only_newline_splits_lines(self):
        text = "# note\x85continued\n# form\x0cfeed more\ng:a:1=api\nempty=\n"
        parsed = parse_lock_file(text)
        assert parsed.comments == ["# note\x85continued", "# form\x0cfeed more"]
        assert parsed.locked == {DependencyCoordinate("g", "a", "1"): {"api"}}

    def test_crlf_line_endings(self):
        parsed = parse_lock_file("# header\r\ng:a:1=api\r\nempty=kapt\r\n")
        assert parsed.comments == ["# header"]
        assert parsed.locked == {DependencyCoordinate("g", "a", "1"): {"api"}}
        assert parsed.previous_empty == {"kapt"}

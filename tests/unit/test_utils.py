"""
Unit tests for helpers (forge_backup/utils.py).
"""

import os

import pytest

from forge_backup.utils import FileIndexer, load_manifest, to_engineering_notation


@pytest.fixture
def site_tree(tree, tmp_path):
    """
    Creates:
    - index.php
    - .env
    - app/Models/User.php
    - storage/logs/laravel.log
    - node_modules/lodash/index.js
    - cache/ (empty)
    """
    root = tree(tmp_path / 'site', [
        'index.php',
        '.env',
        'app/Models/User.php',
        'storage/logs/laravel.log',
        'node_modules/lodash/index.js',
        'cache/',
    ])
    (root / 'index.php').write_text('<?php echo 1;')
    return root


class TestFileIndexer:
    """Test indexing a site tree relative to its root."""

    def test_lists_everything_without_excludes(self, site_tree):
        files, _ = FileIndexer(str(site_tree)).run()

        assert files == sorted([
            '.env',
            'app/Models/User.php',
            'cache',
            'index.php',
            'node_modules/lodash/index.js',
            'storage/logs/laravel.log',
        ])

    def test_total_size(self, site_tree):
        _, size = FileIndexer(str(site_tree)).run()

        assert size == len('<?php echo 1;')

    def test_basename_pattern_matches_at_any_depth(self, site_tree):
        files, _ = FileIndexer(str(site_tree), exclude_patterns=['*.log']).run()

        assert 'storage/logs/laravel.log' not in files
        assert 'index.php' in files

    def test_excluded_directory_is_pruned(self, site_tree):
        files, _ = FileIndexer(str(site_tree), exclude_patterns=['node_modules']).run()

        assert not any(f.startswith('node_modules') for f in files)

    def test_path_pattern(self, site_tree):
        files, _ = FileIndexer(str(site_tree), exclude_patterns=['storage/logs']).run()

        assert 'storage/logs/laravel.log' not in files
        assert 'app/Models/User.php' in files

    def test_exact_path_excludes_only_that_entry(self, site_tree, tree):
        """Test an exact path skips that entry but not others with the same name."""
        tree(site_tree, ['cache/stale.txt', 'app/cache/view.php'])

        files, _ = FileIndexer(str(site_tree), exclude_paths=['./cache']).run()

        assert not any(f.startswith('cache') for f in files)
        assert 'app/cache/view.php' in files

    def test_nested_exact_path(self, site_tree):
        files, _ = FileIndexer(str(site_tree), exclude_paths=['storage/logs']).run()

        assert 'storage/logs/laravel.log' not in files
        assert 'app/Models/User.php' in files

    def test_hidden_files_excluded_by_wildcard(self, site_tree):
        """Test '*' patterns reach dotfiles when hidden files are included."""
        files, _ = FileIndexer(str(site_tree), exclude_patterns=['.*']).run()

        assert '.env' not in files

    def test_symlinks_not_followed(self, site_tree, tmp_path):
        outside = tmp_path / 'outside'
        outside.mkdir()
        (outside / 'secret.txt').write_text('x')
        os.symlink(outside, site_tree / 'linked')

        files, _ = FileIndexer(str(site_tree)).run()

        assert 'linked' in files
        assert 'linked/secret.txt' not in files

    def test_multiple_workers(self, site_tree):
        single, single_size = FileIndexer(str(site_tree)).run()
        multi, multi_size = FileIndexer(str(site_tree), max_workers=2).run()

        assert multi == single
        assert multi_size == single_size


class TestLoadManifest:
    def test_skips_comments_and_blanks(self, tmp_path):
        manifest = tmp_path / 'exclude.txt'
        manifest.write_text('# caches\nnode_modules\n\n  *.log  \n#vendor\n')

        assert load_manifest(str(manifest)) == ['node_modules', '*.log']


class TestEngineeringNotation:
    @pytest.mark.parametrize("value,expected", [
        (0, "0.0"),
        (1500, "1.500E+3"),
        (2_500_000, "2.500E+6"),
        (12, "12.000E+0"),
    ])
    def test_format(self, value, expected):
        assert to_engineering_notation(value) == expected

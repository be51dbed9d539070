"""
Shared pytest fixtures for forge_backup tests.

This module provides fixtures for:
- Building synthetic site trees matching each fingerprint
- Laravel and Wordpress sites with readable credentials
- Shell stand-ins for mysqldump placed on PATH
"""

import os
import stat
from pathlib import Path

import pytest


FINGERPRINT_FILES = {
    'laravel': ['artisan', 'composer.json', 'config/app.php'],
    'wordpress': ['wp-config.php', 'wp-load.php', 'wp-content/'],
    'rails': ['config.ru', 'Gemfile', 'bin/rails'],
    'django': ['manage.py', 'requirements.txt'],
    'express': ['app.js', 'package.json'],
    'flask': ['app.py', 'requirements.txt'],
    'drupal': ['index.php', 'core/includes/bootstrap.inc', 'sites/default/settings.php'],
    'magento': ['index.php', 'app/etc/env.php', 'app/Mage.php'],
}

LARAVEL_ENV = """
APP_NAME=Laravel
APP_ENV=local

DB_CONNECTION=mariadb
DB_HOST=127.0.0.1
DB_PORT=3306
DB_DATABASE=testing
DB_USERNAME=root
DB_PASSWORD="s3cr3t pass"
"""

WORDPRESS_CONFIG = """<?php
/** The name of the database for WordPress */
define( 'DB_NAME', 'wordpress' );

/** Database username */
define( 'DB_USER', 'wp_user' );

/** Database password */
define( 'DB_PASSWORD', "it's-secret" );

define( 'DB_HOST', 'localhost' );
"""


def make_tree(root: Path, paths):
    """Create each relative path under root; a trailing slash makes a directory."""
    root.mkdir(parents=True, exist_ok=True)
    for rel in paths:
        target = root / rel
        if rel.endswith('/'):
            target.mkdir(parents=True, exist_ok=True)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text('')
    return root


@pytest.fixture
def make_site(tmp_path):
    """Factory building a directory that satisfies one site fingerprint."""
    def _make_site(site_type: str, name: str = 'site', extra=()):
        return make_tree(tmp_path / name, FINGERPRINT_FILES[site_type] + list(extra))

    return _make_site


@pytest.fixture
def laravel_site(make_site):
    """Laravel site with a .env holding full database credentials."""
    site = make_site('laravel')
    (site / '.env').write_text(LARAVEL_ENV)
    (site / 'routes').mkdir()
    (site / 'routes' / 'web.php').write_text('<?php // routes')
    return site


@pytest.fixture
def wordpress_site(make_site):
    """Wordpress site with a wp-config.php holding full database credentials."""
    site = make_site('wordpress')
    (site / 'wp-config.php').write_text(WORDPRESS_CONFIG)
    return site


@pytest.fixture
def output_root(tmp_path):
    out = tmp_path / 'home'
    out.mkdir()
    return out


def _install_script(bin_dir: Path, name: str, body: str) -> Path:
    script = bin_dir / name
    script.write_text('#!/bin/sh\n' + body)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def fake_bin(tmp_path, monkeypatch):
    """Directory prepended to PATH; returns a helper to install scripts into it."""
    bin_dir = tmp_path / 'bin'
    bin_dir.mkdir()
    monkeypatch.setenv('PATH', f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")

    def _install(name: str, body: str) -> Path:
        return _install_script(bin_dir, name, body)

    return _install


@pytest.fixture
def fake_mysqldump(fake_bin):
    """
    mysqldump stand-in echoing its arguments and MYSQL_PWD.

    Output looks like:
        -- args: -u root --no-tablespaces testing
        -- password: s3cr3t pass
        CREATE TABLE users (id INT);
    """
    return fake_bin('mysqldump', (
        'echo "-- args: $*"\n'
        'echo "-- password: $MYSQL_PWD"\n'
        'echo "CREATE TABLE users (id INT);"\n'
    ))


@pytest.fixture
def failing_mysqldump(fake_bin):
    """mysqldump stand-in that fails the way a bad login does."""
    return fake_bin('mysqldump', (
        'echo "mysqldump: Got error: 1045: Access denied" >&2\n'
        'exit 2\n'
    ))


@pytest.fixture
def tree():
    """Expose make_tree to tests."""
    return make_tree

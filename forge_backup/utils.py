import math
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import List, Optional, Tuple
from wcmatch import glob
from wcmatch.glob import WcMatcher


def to_engineering_notation(value: float, precision: int = 3):
    if value == 0:
        return "0.0"

    exponent = math.floor(math.log10(abs(value)) / 3) * 3
    mantissa = value / (10 ** exponent)

    return f"{mantissa:.{precision}f}E{exponent:+d}"


def load_manifest(file: str) -> List[str]:
    with open(file, "r") as f:
        lines = [
            line.strip()
            for line in f.readlines()
            if line.strip() and not line.strip().startswith("#")
        ]

    return lines


class FileIndexer:
    """
    Lists every file (and empty directory) below ``root`` as a path
    relative to it, skipping anything matched by ``exclude_patterns``.

    Patterns are wcmatch globs. A pattern without a slash matches the
    entry name at any depth (``*.log``, ``node_modules``); an excluded
    directory is not descended into. ``exclude_paths`` are exact paths
    relative to the root and only ever match that one entry.
    """

    def __init__(
            self,
            root: str,
            exclude_patterns: Optional[List[str]] = None,
            exclude_paths: Optional[List[str]] = None,
            include_hidden=True,
            follow_symlinks=False,
            sort_output=True,
            max_workers: int = 1,
    ):
        self.root = os.path.normpath(root)
        self.follow_symlinks = follow_symlinks
        self.sort_output = sort_output
        self.max_workers = max_workers
        self.exclude_patterns = exclude_patterns
        self.exclude_paths = {
            os.path.normpath(path) for path in exclude_paths or []
        }
        self.include_hidden = include_hidden

    def run(self) -> Tuple[List[str], int]:
        results: List[str] = []
        total_size = 0
        exclude_matcher = self._compile_excludes()

        tops: List[str] = []
        with os.scandir(self.root) as it:
            for entry in it:
                if self.check_excluded(entry.name, exclude_matcher):
                    continue
                tops.append(entry.name)

        if self.max_workers > 1 and tops:
            with ProcessPoolExecutor(max_workers=self.max_workers) as ex:
                futures = [ex.submit(self.walk_subtree, top) for top in tops]
                for f in as_completed(futures):
                    sub_paths, sub_size = f.result()
                    results.extend(sub_paths)
                    total_size += sub_size
        else:
            for top in tops:
                sub_paths, sub_size = self.walk_subtree(top)
                results.extend(sub_paths)
                total_size += sub_size

        if self.sort_output:
            results.sort()

        return results, total_size

    def _compile_excludes(self) -> Optional[WcMatcher]:
        if not self.exclude_patterns:
            return None

        flags = glob.GLOBSTAR | glob.MATCHBASE
        if self.include_hidden:
            flags |= glob.DOTGLOB
        return glob.compile(self.exclude_patterns, flags=flags)

    def check_excluded(
            self, path: str, exclude_matcher: Optional[WcMatcher]
    ) -> bool:
        if path in self.exclude_paths:
            return True
        if exclude_matcher and exclude_matcher.match(path):
            return True
        return False

    def walk_subtree(self, start: str) -> Tuple[List[str], int]:
        """Walk ``start`` (relative to the root) depth first."""
        out: List[str] = []
        total_size = 0
        exclude_matcher = self._compile_excludes()
        stack = [start]

        while stack:
            rel = stack.pop()
            path = os.path.join(self.root, rel)
            if not self.follow_symlinks and os.path.islink(path):
                out.append(rel)
                continue

            try:
                with os.scandir(path) as it:
                    had_child = False
                    for entry in it:
                        child = os.path.join(rel, entry.name)
                        if self.check_excluded(child, exclude_matcher):
                            continue
                        had_child = True
                        if entry.is_dir(follow_symlinks=self.follow_symlinks):
                            stack.append(child)
                        else:
                            out.append(child)
                            try:
                                total_size += entry.stat(
                                    follow_symlinks=False
                                ).st_size
                            except FileNotFoundError:
                                continue
                    if not had_child:
                        out.append(rel)  # empty dir
            except NotADirectoryError:
                out.append(rel)
                try:
                    total_size += os.stat(
                        path, follow_symlinks=False
                    ).st_size
                except FileNotFoundError:
                    pass
            except FileNotFoundError:
                continue

        return out, total_size

# mobilekit

Building blocks for tools that generate and manage mobile app projects:
path arithmetic, version parsing, template pack lookup, submodule checks,
forced symlinks, cargo argument lists and terminal reports.

## Installation

```
pip install mobilekit
```

To run the test suite:

```
pip install "mobilekit[test]"
pytest
```

## Modules

- `mobilekit.paths`: `home_dir`, `expand_home` (a leading `~` becomes the
  home directory), `contract_home`, `install_dir` (`$CARGO_HOME/.mobilekit`,
  or `~/.cargo/.mobilekit`), `checkouts_dir`, `tools_dir`, `temp_dir`, and
  path helpers `prefix_path`, `unprefix_path`, `relativize_path`,
  `normalize_path`, `under_root` and `last_modified`. Errors: `NoHomeDir`,
  `ContractHomeError`, `PathNotPrefixed`, `NormalizationError`.
- `mobilekit.versions`: `VersionTriple` and `VersionDouble`, ordered and
  parsed from `major[.minor][.patch]` text with their `parse` class methods;
  `RustVersion.parse` reads the output of `rustc --version`, and
  `RustVersion.valid` reports whether that toolchain is usable.
- `mobilekit.common`: `list_display`, `reverse_domain`, `prepend_to_path`,
  `format_commit_msg`, `installed_commit_msg`, `one_or_many`,
  `get_string_for_group` and the `with_working_dir` context manager.
- `mobilekit.cli`: `Report` with `Report.error`, `Report.action_request` and
  `Report.victory`; `format` wraps the text to a width and can colour it,
  `print` writes errors to stderr and everything else to stdout, and
  `exit_code` is 0 for a victory and 1 otherwise. Also `Label`, the
  `Reportable` base class, `bin_name` and `get_args`.
- `mobilekit.prompt`: `minimal`, `default`, `yes_no`, `list_display_only`
  and `choose`, which keeps asking until a valid index is entered.
- `mobilekit.links`: `LinkCall` with `LinkType`, `Clobber` and
  `TargetStyle`, plus `force_symlink` and `force_symlink_relative`. Failures
  raise `LinkError`.
- `mobilekit.cargo`: `CargoCommand`, whose `args()` returns the arguments
  after the program name and whose `env()` merges an environment with the
  target-directory variables from `explicit_cargo_env`.
- `mobilekit.git`: `Git`, which reads `.git/config` and `.gitmodules`, and
  `Submodule`, which infers its name from a `<name>.git` remote and checks
  `in_index` and `initialized`.
- `mobilekit.packs`: `lookup`, `lookup_platform`, `lookup_app` and
  `list_app_packs`; a pack is a `SimplePack` (a directory) or a `FancyPack`
  (a `<name>.toml` spec with `path`, optional `base` and `submodule`).
- `mobilekit.helpers`: template helpers such as `html_escape`, `join`,
  `quote_and_join`, `snake_case`, `dot_to_slash`, `prefix_path` and
  `unprefix_path`, collected by name in `template_helpers`.

## Example

```python
from mobilekit.versions import VersionTriple
from mobilekit.common import list_display, reverse_domain

print(VersionTriple.parse("1.45"))             # 1.45.0
print(list_display(["apple", "android"]))      # apple and android
print(reverse_domain("com.example"))           # example.com
```

## What it does not do

- There is no command-line program; the package is a library.
- It starts no other programs. `CargoCommand` builds argument lists and
  environments but does not run cargo; `RustVersion.parse` takes text you
  have already captured.
- It does not run git: it does not clone, fetch, update or initialize
  repositories or submodules. `FancyPack.resolve` only checks that the pack
  directories exist.
- It does not render templates; `mobilekit.helpers` provides the helper
  functions only.
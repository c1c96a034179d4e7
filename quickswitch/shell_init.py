"""Shell wrapper scripts printed by ``quickswitch --init SHELL``.

A child process cannot change its parent's working directory, so each
wrapper runs the navigator with ``--output-file`` pointing at a temp file,
reads the chosen path back, deletes the file, and ``cd``s when the path is an
existing directory. ``qs`` starts in browsing mode and ``qshs`` in history mode.
"""

from __future__ import annotations

SUPPORTED_SHELLS = ("bash", "zsh", "fish", "powershell")

_POSIX_TEMPLATE = """\
__quickswitch_run() {{
  local tmp_file dest_path
  tmp_file="$(mktemp)" || return 1
  {command} --output-file "$tmp_file" "$@"
  local run_status=$?
  dest_path="$(cat "$tmp_file" 2>/dev/null)"
  rm -f "$tmp_file"
  if [ -n "$dest_path" ] && [ -d "$dest_path" ]; then
    cd "$dest_path" || return 1
  elif [ -n "$dest_path" ]; then
    printf 'quickswitch: not a directory: %s\\n' "$dest_path" >&2
  fi
  return $run_status
}}

qs() {{
  __quickswitch_run "$@"
}}

qshs() {{
  __quickswitch_run --history "$@"
}}
"""

_FISH_TEMPLATE = """\
function __quickswitch_run
    set -l tmp_file (mktemp)
    or return 1
    {command} --output-file $tmp_file $argv
    set -l run_status $status
    set -l dest_path (cat $tmp_file 2>/dev/null)
    rm -f $tmp_file
    if test -n "$dest_path"; and test -d "$dest_path"
        cd $dest_path
    else if test -n "$dest_path"
        printf 'quickswitch: not a directory: %s\\n' $dest_path >&2
    end
    return $run_status
end

function qs
    __quickswitch_run $argv
end

function qshs
    __quickswitch_run --history $argv
end
"""

_POWERSHELL_TEMPLATE = """\
function Invoke-QuickSwitch {{
    $tmpFile = [System.IO.Path]::GetTempFileName()
    try {{
        & {command} --output-file $tmpFile @args
        $destPath = (Get-Content -Raw -ErrorAction SilentlyContinue $tmpFile)
        if ($destPath) {{ $destPath = $destPath.Trim() }}
    }} finally {{
        Remove-Item -Force -ErrorAction SilentlyContinue $tmpFile
    }}
    if ($destPath -and (Test-Path -LiteralPath $destPath -PathType Container)) {{
        Set-Location -LiteralPath $destPath
    }} elseif ($destPath) {{
        Write-Error "quickswitch: not a directory: $destPath"
    }}
}}

function qs {{ Invoke-QuickSwitch @args }}
function qshs {{ Invoke-QuickSwitch --history @args }}
"""

_TEMPLATES = {
    "bash": _POSIX_TEMPLATE,
    "zsh": _POSIX_TEMPLATE,
    "fish": _FISH_TEMPLATE,
    "powershell": _POWERSHELL_TEMPLATE,
}


def init_script(shell: str, command: str = "quickswitch") -> str:
    """Return the wrapper script for ``shell``.

    Raises ``ValueError`` for unsupported shells.
    """
    template = _TEMPLATES.get(shell.lower())
    if template is None:
        raise ValueError(f"unsupported shell: {shell}")
    return template.format(command=command)


__all__ = [
    "SUPPORTED_SHELLS",
    "init_script",
]

from fdup.core.models import HashAlgorithmName

ALGORITHM_ALIASES = {
    "sha256": HashAlgorithmName.SHA256,
    "xxhash": HashAlgorithmName.XXHASH,
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

_ALGORITHM_NOTES = {
    HashAlgorithmName.SHA256: "cryptographic (default)",
    HashAlgorithmName.XXHASH: "much faster, not collision resistant",
}

ALGORITHM_HELP_TEXT = "Digest used to decide whether two files are identical:\n" + "".join(
    f"  {alias:<6} : {algorithm.display_name}, {_ALGORITHM_NOTES[algorithm]}\n"
    for alias, algorithm in ALGORITHM_ALIASES.items()
)

EXTENSIONS_HELP_TEXT = (
    "Limit processing to files with these extensions.\n"
    "Separate multiple values with commas or repeat the flag:\n"
    "  %(prog)s -x jpg,png -x .gif ~/Pictures\n"
)

EPILOG_TEXT = """
Examples:
  Find duplicates in the current directory
  %(prog)s

  Find duplicates across several trees (nested trees are scanned once)
  %(prog)s ~/Photos ~/Backup/Photos ~/Downloads

  Only compare pictures, treating .JPG and .jpg alike
  %(prog)s -x jpg,jpeg,png ~/Photos

  Delete every duplicate, keeping the first copy encountered
  %(prog)s --delete ~/Photos ~/Downloads

  Delete duplicates only from the last tree, moving them to the trash
  %(prog)s --delete --last --trash ~/Photos ~/Downloads

Notes:
  Symbolic links, FIFOs, sockets and devices are never followed or hashed,
  so removing duplicates never deletes a link or the file behind it.
  Hidden directories given on the command line are skipped unless --hidden is set.
  Progress is redrawn on a single status line on stderr while the scan runs;
  the final status is printed on two lines.
"""

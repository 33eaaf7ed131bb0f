
def read_single_line(filename):
    """ Read the first line of a file, with trailing whitespace removed.
        Returns None on any problem: the file does not exist, cannot be
        opened or decoded, or has no lines.
    """

    try:
        with open(filename, 'r', encoding='utf-8') as f:
            line = f.readline()
    except (OSError, UnicodeDecodeError):
        return None

    if line == '':
        return None

    return line.rstrip()


def write_single_line(filename, line):
    """ Replace the contents of a file with a single line. Any OSError is
        left for the caller to handle.
    """

    with open(filename, 'w', encoding='utf-8') as f:
        f.write(line + '\n')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:

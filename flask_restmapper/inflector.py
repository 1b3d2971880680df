"""
String inflections used for attribute keys and resource type names.
"""
import re

_camelize_re = re.compile(r'(?:^|_+)([A-Za-z0-9]*)')
_acronym_re = re.compile(r'([A-Z\d]+)([A-Z][a-z])')
_word_boundary_re = re.compile(r'([a-z\d])([A-Z])')

UNCOUNTABLE = frozenset((
    'equipment', 'information', 'rice', 'money', 'species', 'series', 'fish', 'sheep', 'jeans', 'police', 'news',
    'metadata',
))

IRREGULAR = {
    'bases': 'base',
    'people': 'person',
    'men': 'man',
    'women': 'woman',
    'children': 'child',
    'sexes': 'sex',
    'moves': 'move',
    'zombies': 'zombie',
    'statuses': 'status',
    'aliases': 'alias',
}

SINGULAR_RULES = [
    (r'(database)s$', r'\1'),
    (r'(quiz)zes$', r'\1'),
    (r'(matr)ices$', r'\1ix'),
    (r'(vert|ind)ices$', r'\1ex'),
    (r'^(ox)en', r'\1'),
    (r'(octop|vir)(us|i)$', r'\1us'),
    (r'(cris|test)(is|es)$', r'\1is'),
    (r'(shoe)s$', r'\1'),
    (r'(o)es$', r'\1'),
    (r'(alias|status)(es)?$', r'\1'),
    (r'(bus)(es)?$', r'\1'),
    (r'([ml])ice$', r'\1ouse'),
    (r'(x|ch|ss|sh)es$', r'\1'),
    (r'(m)ovies$', r'\1ovie'),
    (r'(s)eries$', r'\1eries'),
    (r'([^aeiouy]|qu)ies$', r'\1y'),
    (r'([lr])ves$', r'\1f'),
    (r'(tive)s$', r'\1'),
    (r'(hive)s$', r'\1'),
    (r'([^f])ves$', r'\1fe'),
    (r'(^analy)(sis|ses)$', r'\1sis'),
    (r'([ti])a$', r'\1um'),
    (r'(n)ews$', r'\1ews'),
    (r'(ss)$', r'\1'),
    (r's$', ''),
]
SINGULAR_RULES = [(re.compile(rule, re.IGNORECASE), replacement) for rule, replacement in SINGULAR_RULES]


def camelize(word, uppercase_first_letter=True):
    """
    Convert an underscored word to CamelCase, or lowerCamelCase when ``uppercase_first_letter`` is ``False``.

    >>> camelize('foo_bar')
    'FooBar'
    >>> camelize('foo_bar', False)
    'fooBar'
    """
    word = str(word)
    camelized = _camelize_re.sub(lambda m: m.group(1)[:1].upper() + m.group(1)[1:], word)
    if not uppercase_first_letter:
        camelized = camelized[:1].lower() + camelized[1:]
    return camelized


def underscore(word):
    """
    Convert a CamelCase or lowerCamelCase word to its underscored form.

    >>> underscore('camelizedAttrName')
    'camelized_attr_name'
    >>> underscore('HTTPServer')
    'http_server'
    """
    word = _acronym_re.sub(r'\1_\2', str(word))
    word = _word_boundary_re.sub(r'\1_\2', word)
    return word.replace('-', '_').lower()


def singularize(word):
    """
    Return the singular form of an English ``word``; words that are already singular are returned unchanged.

    >>> singularize('foo_bars')
    'foo_bar'
    >>> singularize('categories')
    'category'
    """
    word = str(word)
    prefix, _, last = word.rpartition('_')
    lower = last.lower()

    if not last or lower in UNCOUNTABLE:
        return word

    if lower in IRREGULAR:
        singular = IRREGULAR[lower]
        singular = last[:1] + singular[1:]
    else:
        singular = last
        for rule, replacement in SINGULAR_RULES:
            if rule.search(last):
                singular = rule.sub(replacement, last)
                break

    return '{}_{}'.format(prefix, singular) if prefix else singular


def pascalize(word):
    """
    Normalize an attribute key or class name to the PascalCase form used for resource type names.

    >>> pascalize('foo_bar')
    'FooBar'
    >>> pascalize('FooBar')
    'FooBar'
    """
    return camelize(underscore(word))

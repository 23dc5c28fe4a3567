from datasette_wikisearch.plugins.discover_allow import canonicalize_url, config_default_value

def test_allow():
    assert canonicalize_url({}, 'https://fr.wikipedia.org/wiki/Z') == None

    config = config_default_value()

    assert canonicalize_url(config, 'https://en.wikipedia.org/wiki/Python') == None
    assert canonicalize_url(config, 'https://fr.wikipedia.org/wiki/Python') == False
    assert canonicalize_url(config, 'https://en.wikipedia.org/wiki/Help:Contents') == False
    assert canonicalize_url(config, 'https://en.wikipedia.org/w/index.php?title=Python') == False

def test_host_regex_is_anchored():
    config = {'host-regex': r'en\.example\.org'}

    assert canonicalize_url(config, 'https://en.example.org/') == None
    assert canonicalize_url(config, 'https://en.example.org.evil.com/') == False
    assert canonicalize_url(config, 'https://fr.example.org/wiki/Z') == False

def test_port_is_not_part_of_the_host():
    assert canonicalize_url({'host-regex': '^localhost$'}, 'http://localhost:8080/wiki/A') == None

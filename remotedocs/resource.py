# Copyright (c) 2009-2010 Six Apart Ltd.
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# * Redistributions of source code must retain the above copyright notice,
#   this list of conditions and the following disclaimer.
#
# * Redistributions in binary form must reproduce the above copyright notice,
#   this list of conditions and the following disclaimer in the documentation
#   and/or other materials provided with the distribution.
#
# * Neither the name of Six Apart Ltd. nor the names of its contributors may
#   be used to endorse or promote products derived from this software without
#   specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
# ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE
# LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
# CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
# SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
# INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
# CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.

"""

`Resource` is the base class for objects that stand in for entities of the
remote document service, such as documents and users.

A `Resource` keeps a local store of the remote entity's attributes. Which
attributes an entity has is not declared anywhere in this library: they are
whatever the service sent the last time the resource was loaded. Any
attribute can be read or written through normal attribute access:

>>> doc = Document.find(text='foo')[0]
>>> doc.title
'Title'
>>> doc.title = 'New Title'
>>> doc.self_destruct_in = 5    # no error, though the service ignores it

Changes are kept locally until the resource is saved. Saving sends the local
attributes to the service and reloads the store from its response, which
drops any attribute the service doesn't know about.

`Resource` itself never talks to the service. Concrete subclasses implement
`save()`, `find()` and `destroy()` and call `load_attributes()` with each
successful response.

"""

from collections.abc import Iterable, Mapping
import logging


log = logging.getLogger('remotedocs.resource')


class Symbol(str):

    """A string that is an enumerated tag rather than free text.

    Elements of a response with a ``type="symbol"`` attribute are decoded into
    `Symbol` instances. A `Symbol` compares equal to the plain string with the
    same content.

    """

    __slots__ = ()

    def __repr__(self):
        return 'Symbol(%s)' % str.__repr__(self)


def attribute_name(name):
    """Returns `name` normalized as an attribute name.

    Attribute names are strings. If `name` is not a string, raises
    `TypeError`.

    """
    if not isinstance(name, str):
        raise TypeError('Attribute name %r is not a string' % (name,))
    return str(name)


decoders = {
    'integer': int,
    'float':   float,
    'symbol':  Symbol,
}


def element_text(element):
    """Returns the text content of a response element, or `None` if it has
    none.

    If the element's own text is missing or only whitespace, the content of
    its first CDATA section is used instead. Elements from `parse_xml()` keep
    CDATA content in their `literals`; plain ElementTree elements merge it
    into their text.

    """
    text = element.text
    if text is None or not text.strip():
        literals = getattr(element, 'literals', None)
        if literals:
            return literals[0]
        return None
    return text


def decode_element(element):
    """Decodes the value of a response element according to its ``type``
    attribute."""
    text = element_text(element)
    if text is None:
        return None
    decoder = decoders.get(element.get('type'))
    if decoder is None:
        return text
    try:
        return decoder(text.strip())
    except ValueError:
        raise ValueError('Value %r of element %r is not a valid %s'
            % (text, element.tag, element.get('type')))


class Resource(object):

    """A local stand-in for one entity of the remote service.

    A `Resource` holds the entity's attributes and two flags: whether the
    resource has been created on the service, and whether its local
    attributes are known to match the service's.

    Every attribute can be read and set as a regular Python attribute, even
    if the service never sent it. Reading an attribute that isn't set gives
    `None`. Names starting with an underscore are reserved for the instance's
    own state, and names of methods (such as ``save``) read as the method; use
    indexing (``resource['save']``) or `read_attribute()` to reach attributes
    with such names.

    `Resource` instances are not safe to use from several threads at once. In
    particular, changing attributes while a `save()` is in progress on another
    thread has no defined result.

    """

    def __init__(self, attributes=None, transport=None):
        """Initializes a new, unsaved and uncreated resource.

        Optional parameter `attributes` is a mapping of initial attribute
        values. Optional parameter `transport` is the `Transport` the
        subclass's remote operations should use.

        """
        self._saved = False
        self._created = False
        self._attributes = {}
        self._transport = transport
        if attributes is not None:
            self.write_attributes(attributes)

    @classmethod
    def create(cls, attributes=None, **kwargs):
        """Creates a new resource with the given attributes, saves it, and
        returns it.

        The resource is returned even if the service did not accept it. Check
        `is_created()` on the result to find out whether the save worked.
        Other keyword arguments are passed on to the constructor.

        """
        self = cls(attributes, **kwargs)
        self.save()
        return self

    def save(self):
        """Sends the resource's attributes to the service, creating the remote
        entity if necessary, and reloads them from the response.

        Subclasses must implement this method.

        """
        raise NotImplementedError('Cannot save %s objects' % type(self).__name__)

    @classmethod
    def find(cls, query):
        """Searches the service and returns the matching resources.

        Subclasses must implement this method.

        """
        raise NotImplementedError('Cannot find %s objects' % cls.__name__)

    def destroy(self):
        """Deletes the remote entity.

        Subclasses must implement this method.

        """
        raise NotImplementedError('Cannot destroy %s objects' % type(self).__name__)

    def is_saved(self):
        """Returns whether the local attributes are known to match the remote
        entity's."""
        return self._saved

    def is_created(self):
        """Returns whether the resource exists on the service."""
        return self._created

    def read_attribute(self, name):
        """Returns the value of the named attribute, or `None` if it isn't
        set."""
        return self._attributes.get(attribute_name(name))

    def read_attributes(self, names):
        """Returns a dictionary of the named attributes' values.

        Every requested name is a key of the result; attributes that aren't
        set have the value `None`. If `names` is not an iterable collection of
        strings, raises `TypeError`.

        """
        if isinstance(names, (str, bytes)) or not isinstance(names, Iterable):
            raise TypeError('Attribute names must be given as a collection, not %r'
                % (names,))
        keys = [attribute_name(name) for name in names]
        return dict((key, self._attributes.get(key)) for key in keys)

    def write_attributes(self, values):
        """Sets attributes from the mapping `values`.

        The new values are only stored locally; call `save()` to send them to
        the service. The resource is no longer considered saved afterward.

        """
        if not isinstance(values, Mapping):
            raise TypeError('Attribute values must be given as a mapping, not %r'
                % (values,))
        update = dict((attribute_name(k), v) for k, v in values.items())
        self._attributes.update(update)
        self._saved = False

    def get(self, name, default=None):
        return self._attributes.get(attribute_name(name), default)

    def set(self, name, *values):
        if len(values) != 1:
            raise TypeError('Exactly one value can be assigned to attribute %r (%d given)'
                % (name, len(values)))
        self.write_attributes({name: values[0]})

    def load_attributes(self, document):
        """Replaces all the resource's attributes with those in a response.

        Parameter `document` is an ElementTree element whose children are the
        attribute elements. Each child's tag is an attribute name and its text
        the value, decoded according to the child's ``type`` attribute
        (``integer``, ``float`` or ``symbol``; otherwise the text is kept).

        Attributes not in `document` are dropped. If a value can't be
        decoded, raises `ValueError` and leaves the attributes unchanged.
        Unlike lenient coercion that turns bad or missing numbers into zero,
        missing text decodes to `None` and malformed numbers are rejected.
        Neither flag is changed; that's up to the caller.

        """
        attributes = {}
        for element in document:
            attributes[attribute_name(element.tag)] = decode_element(element)
        log.debug('Loaded %d attributes into %s', len(attributes),
            type(self).__name__)
        self._attributes = attributes

    def __getattr__(self, name):
        # Only called for names not found on the instance or class.
        if name.startswith('_'):
            raise AttributeError("%r object has no attribute %r"
                % (type(self).__name__, name))
        return self._attributes.get(name)

    def __setattr__(self, name, value):
        if name.startswith('_') or hasattr(getattr(type(self), name, None), '__set__'):
            super(Resource, self).__setattr__(name, value)
        else:
            self.set(name, value)

    def __delattr__(self, name):
        if name.startswith('_'):
            super(Resource, self).__delattr__(name)
        else:
            self._attributes.pop(name, None)
            self._saved = False

    def __getitem__(self, name):
        return self.read_attribute(name)

    def __setitem__(self, name, value):
        self.set(name, value)

    def __delitem__(self, name):
        self._attributes.pop(attribute_name(name), None)
        self._saved = False

    def __contains__(self, name):
        return attribute_name(name) in self._attributes

    def __iter__(self):
        return iter(list(self._attributes))

    def __eq__(self, other):
        """Returns whether two resources are of the same type and have the
        same attributes."""
        if type(self) != type(other):
            return False
        return self._attributes == other._attributes

    # Equality follows the mutable attributes, so resources are unhashable.
    __hash__ = None

    def __repr__(self):
        attrs = ', '.join('%s=%s' % (k, v) for k, v in self._attributes.items()
            if v is not None)
        if not attrs:
            return '<%s>' % type(self).__name__
        return '<%s %s>' % (type(self).__name__, attrs)

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

remotedocs is a client library for a remote document-management web API.

Documents, users and the other entities of the service are represented as
`Resource` objects. A resource's attributes aren't declared in this library;
they are whatever the service returns, and can be read and set as regular
Python attributes. Changes are kept locally until the resource is saved.

remotedocs has:

* schema-less resources, so new attributes on the service need no library
  changes

* full HTTP support through the `httplib2` library, including caching

* explicit configuration through `Transport` objects, with no global state


Example
=======

For example, a document resource for the service can be built on `Resource`
and `Transport`::

    >>> from remotedocs import Resource, Transport
    >>> class Document(Resource):
    ...     def save(self):
    ...         rsp = self._transport.call('docs.upload', **self.read_attributes(self))
    ...         self.load_attributes(rsp)
    ...         self._created = self._saved = True
    ...
    >>> transport = Transport('my-api-key')
    >>> doc = Document.create({'title': 'Hello'}, transport=transport)
    >>> doc.is_created()
    True

Names of attributes the service doesn't know can still be set. They are
dropped the next time the resource is loaded from a response.

"""

__version__ = '1.0'
__date__ = '17 October 2026'

from remotedocs.http import Transport
from remotedocs.resource import Resource, Symbol

__all__ = ('Resource', 'Symbol', 'Transport')

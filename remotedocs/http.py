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

`Transport` carries API calls from resources to the remote document service.

A `Transport` holds the service's endpoint and the caller's API key, so there
is no module-level configuration to set up: make a `Transport` and pass it to
the resources that need it.

>>> from remotedocs import Transport
>>> transport = Transport('my-api-key')
>>> rsp = transport.call('docs.getList', limit=10)
>>> [e.findtext('title') for e in rsp.find('resultset')]
['Introduction', 'Glossary']

"""

import http.client
import logging
from urllib.parse import urlencode
from xml.etree import ElementTree
from xml.parsers import expat

import httplib2


userAgent = httplib2.Http()

log = logging.getLogger('remotedocs.http')


class ResponseElement(ElementTree.Element):

    """An ElementTree element that keeps the content of its CDATA sections
    apart from its text.

    The content of each CDATA section directly inside the element is in the
    `literals` list, in document order, and is not part of the element's
    `text` or its children's `tail`.

    """

    def __init__(self, tag, attrib={}, **extra):
        super(ResponseElement, self).__init__(tag, attrib, **extra)
        self.literals = []


class ResponseParser(object):

    """A parser for API responses that builds `ResponseElement` trees.

    ElementTree's own parser merges CDATA sections into the surrounding text,
    so this parser drives expat directly and files CDATA content under the
    containing element's `literals` instead.

    """

    def __init__(self):
        self.builder = ElementTree.TreeBuilder(element_factory=ResponseElement)
        self.elements = []
        self.literal = None

        self.parser = expat.ParserCreate()
        self.parser.StartElementHandler = self.start
        self.parser.EndElementHandler = self.end
        self.parser.CharacterDataHandler = self.data
        self.parser.StartCdataSectionHandler = self.start_cdata
        self.parser.EndCdataSectionHandler = self.end_cdata

    def start(self, tag, attrib):
        self.elements.append(self.builder.start(tag, attrib))

    def end(self, tag):
        self.builder.end(tag)
        self.elements.pop()

    def data(self, data):
        if self.literal is None:
            self.builder.data(data)
        else:
            self.literal.append(data)

    def start_cdata(self):
        self.literal = []

    def end_cdata(self):
        self.elements[-1].literals.append(''.join(self.literal))
        self.literal = None

    def parse(self, content):
        """Parses `content` (a string or bytes) and returns the root element.

        Malformed XML raises `xml.parsers.expat.ExpatError`.

        """
        self.parser.Parse(content, True)
        return self.builder.close()


def parse_xml(content):
    """Parses an XML response body into a tree of `ResponseElement`
    instances."""
    return ResponseParser().parse(content)


class Transport(object):

    """An API client that calls methods of the remote service over HTTP and
    returns their parsed XML responses."""

    endpoint = 'https://api.example.com/api'

    content_types = ('text/xml', 'application/xml')

    class NotFound(http.client.HTTPException):
        """An HTTPException thrown when the server reports that the requested
        resource was not found."""
        pass

    class Unauthorized(http.client.HTTPException):
        """An HTTPException thrown when the server reports that the request
        is not allowed without authentication.

        This exception corresponds to the HTTP status code 401. The API key
        the `Transport` was made with may be missing or wrong.

        """
        pass

    class Forbidden(http.client.HTTPException):
        """An HTTPException thrown when the server reports that the caller, as
        authenticated, is not allowed to make the request.

        This exception corresponds to the HTTP status code 403.

        """
        pass

    class RequestError(http.client.HTTPException):
        """An HTTPException thrown when the server reports an error in the
        client's request.

        This exception corresponds to the HTTP status code 400.

        """
        pass

    class ServerError(http.client.HTTPException):
        """An HTTPException thrown when the server reports an unexpected error.

        This exception corresponds to the HTTP status code 500.

        """
        pass

    class BadResponse(http.client.HTTPException):
        """An HTTPException thrown when the client receives some other
        non-success HTTP response, or a response it can't parse."""
        pass

    class ResponseError(http.client.HTTPException):
        """An HTTPException thrown when the service answers an API call with a
        failure response.

        The service's error code and message are available as the `code` and
        `message` attributes.

        """

        def __init__(self, method, code, message):
            self.code = code
            self.message = message
            super(Transport.ResponseError, self).__init__(
                'Error %s calling %s: %s' % (code, method, message))

    def __init__(self, api_key, endpoint=None, http=None):
        """Configures the transport.

        Parameter `api_key` is the key identifying the calling application to
        the service. Optional parameter `endpoint` is the URL of the API, if
        not the class's default. Optional parameter `http` is the user agent
        object to use for requests; it should be compatible with
        `httplib2.Http` instances.

        """
        self.api_key = api_key
        if endpoint is not None:
            self.endpoint = endpoint
        self.http = http

    def get_request(self, method, **params):
        """Returns the parameters for calling the API method `method` as a
        dictionary of keyword arguments suitable for passing to
        `httplib2.Http.request()`.

        Keyword parameters are sent as the method's arguments. Parameters with
        the value `None` are left out.

        """
        args = dict((k, v) for k, v in params.items() if v is not None)
        args['method'] = method
        args['api_key'] = self.api_key
        body = urlencode(sorted(args.items()))

        headers = {
            'accept': ', '.join(self.content_types),
            'content-type': 'application/x-www-form-urlencoded',
        }

        # Use 'uri' because httplib2.request does.
        return dict(uri=self.endpoint, method='POST', body=body, headers=headers)

    def raise_for_response(self, method, response, content):
        """Raises exceptions corresponding to HTTP responses that aren't
        successful API responses.

        Override this method to customize the error handling behavior of the
        transport for your service.

        """
        url = response.get('content-location', self.endpoint)
        if response.status == http.client.NOT_FOUND:
            raise self.NotFound('No such API %s at %s' % (method, url))
        if response.status == http.client.UNAUTHORIZED:
            raise self.Unauthorized('Not authorized to call %s' % method)
        if response.status == http.client.FORBIDDEN:
            raise self.Forbidden('Forbidden from calling %s' % method)

        if response.status in (http.client.INTERNAL_SERVER_ERROR, http.client.BAD_REQUEST):
            if response.status == http.client.BAD_REQUEST:
                err_cls = self.RequestError
            else:
                err_cls = self.ServerError
            # Pull out an error if we can.
            content_type = response.get('content-type', '').split(';', 1)[0].strip()
            if content_type == 'text/plain':
                if isinstance(content, bytes):
                    content = content.decode('utf-8', 'replace')
                error = content.split('\n', 2)[0]
                exc = err_cls('%d %s calling %s: %s'
                    % (response.status, response.reason, method, error))
                exc.response_error = error
                raise exc
            raise err_cls('%d %s calling %s'
                % (response.status, response.reason, method))

        if response.status != http.client.OK:
            raise self.BadResponse('Unexpected response calling %s: %d %s'
                % (method, response.status, response.reason))

    def parse_response(self, method, content):
        """Parses the body of a successful HTTP response into a `ResponseElement`
        tree, raising `ResponseError` if the service reports that the call
        failed."""
        try:
            root = parse_xml(content)
        except expat.ExpatError as exc:
            raise self.BadResponse('Bad response calling %s: %s' % (method, exc))

        if root.get('stat') == 'fail':
            error = root.find('error')
            if error is None:
                raise self.ResponseError(method, None, 'unknown error')
            raise self.ResponseError(method, error.get('code'), error.get('message'))

        return root

    def call(self, method, **params):
        """Calls the API method `method` with the given keyword parameters and
        returns the root element of the response.

        HTTP and service errors are raised as the exceptions defined on the
        `Transport` class.

        """
        request = self.get_request(method, **params)

        http = self.http
        if http is None:
            http = userAgent
        log.debug('Calling %s at %s', method, request['uri'])
        response, content = http.request(**request)
        log.debug('Got %d response for %s', response.status, method)

        self.raise_for_response(method, response, content)
        return self.parse_response(method, content)

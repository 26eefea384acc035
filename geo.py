'''
3D unsteady panel method
date: 2 Oct 2017

Geometry module: collection of methods to set-up panel meshes. All methods
return Surface or LiftingSurface instances with outward normals.
'''

import numpy as np

from surface import Surface, LiftingSurface


def build_flat_plate(a,b,Na,Nb,origin=(0.,0.,0.)):
	'''
	Flat rectangular plate of sides a (along x) and b (along y) in the plane
	z=origin[2], with Na x Nb panels. Normals point along +z.
	'''

	xv=np.linspace(0.,a,Na+1)+origin[0]
	yv=np.linspace(0.,b,Nb+1)+origin[1]

	nodes=np.zeros(((Na+1)*(Nb+1),3))
	for jj in range(Nb+1):
		for ii in range(Na+1):
			nodes[jj*(Na+1)+ii,:]=[xv[ii],yv[jj],origin[2]]

	panel_nodes=[]
	for jj in range(Nb):
		for ii in range(Na):
			n1=jj*(Na+1)+ii
			panel_nodes.append([n1,n1+1,n1+Na+2,n1+Na+1])

	return Surface(nodes,panel_nodes)


def build_sphere(R,Nlat,Nlon,centre=(0.,0.,0.)):
	'''
	Sphere of radius R discretised with Nlat panels along the meridians and
	Nlon along the parallels. The polar caps are made of triangles.
	@note: Nlon even gives a mesh symmetric about the planes x=0 and y=0.
	'''

	if Nlat<2 or Nlon<3:
		raise ValueError('Sphere needs at least Nlat=2, Nlon=3!')

	centre=np.asarray(centre,dtype=float)
	thv=np.linspace(0.,np.pi,Nlat+1)[1:-1]
	phv=2.*np.pi*np.arange(Nlon)/Nlon

	nodes=[ [0.,0.,R] ]
	for th in thv:
		for ph in phv:
			nodes.append([R*np.sin(th)*np.cos(ph),R*np.sin(th)*np.sin(ph),
																 R*np.cos(th)])
	nodes.append([0.,0.,-R])
	nodes=np.array(nodes)+centre
	Ksouth=nodes.shape[0]-1

	def ring(kk,ll):
		return 1+kk*Nlon+ll%Nlon

	panel_nodes=[]
	# north cap
	for ll in range(Nlon):
		panel_nodes.append([0,ring(0,ll),ring(0,ll+1)])
	# belts
	for kk in range(Nlat-2):
		for ll in range(Nlon):
			panel_nodes.append([ring(kk,ll),ring(kk+1,ll),
												ring(kk+1,ll+1),ring(kk,ll+1)])
	# south cap
	for ll in range(Nlon):
		panel_nodes.append([ring(Nlat-2,ll),Ksouth,ring(Nlat-2,ll+1)])

	return Surface(nodes,panel_nodes)


def naca4_section(Mcamb,Pcamb,Tthick,Nchord):
	'''
	NACA 4 digit section of unit chord. Mcamb and Pcamb are the maximum camber
	(in percentage of chord) and the position of max. camber (in 10s of
	chord), Tthick the thickness in percentage of chord. A cosine spacing with
	Nchord panels per side is used, the trailing edge is closed.

	Returns the (2*Nchord,2) ring of (x,z) coordinates starting from the
	trailing edge, running along the lower side to the leading edge and back
	along the upper side. The trailing edge is not repeated.
	'''

	beta=np.linspace(0.,np.pi,Nchord+1)
	xv=0.5*(1.-np.cos(beta))
	m,p,t=1e-2*Mcamb,1e-1*Pcamb,1e-2*Tthick

	# thickness, with closed trailing edge
	yt=5.*t*(0.2969*np.sqrt(xv)-0.1260*xv-0.3516*xv**2+0.2843*xv**3
															 -0.1036*xv**4)

	# camber
	yc=np.zeros((Nchord+1,))
	dyc=np.zeros((Nchord+1,))
	if m>0. and p>0.:
		iifore=xv<=p
		iiaft=~iifore
		yc[iifore]=m/p**2*xv[iifore]*(2.*p-xv[iifore])
		yc[iiaft]=m/(1.-p)**2*(1.-2.*p+2.*p*xv[iiaft]-xv[iiaft]**2)
		dyc[iifore]=2.*m/p**2*(p-xv[iifore])
		dyc[iiaft]=2.*m/(1.-p)**2*(p-xv[iiaft])
	th=np.arctan(dyc)

	xu,zu=xv-yt*np.sin(th),yc+yt*np.cos(th)
	xl,zl=xv+yt*np.sin(th),yc-yt*np.cos(th)

	Coord=np.zeros((2*Nchord,2))
	# lower side: TE to LE
	Coord[:Nchord+1,0]=xl[::-1]
	Coord[:Nchord+1,1]=zl[::-1]
	# upper side: LE to TE (TE excluded)
	Coord[Nchord+1:,0]=xu[1:-1]
	Coord[Nchord+1:,1]=zu[1:-1]
	# exact trailing edge
	Coord[0,:]=[1.,0.5*(zl[-1]+zu[-1])]

	return Coord


def build_wing(chord,span,Nchord,Nspan,alpha=0.,naca='0012',
							   origin=(0.,0.,0.),planform='rectangular'):
	'''
	Wing of given root chord and span with NACA 4 digit sections. The span
	runs along y, centred at origin. The wing is pitched by alpha (positive
	nose up) about the leading edge of the root section. Tips are left open.

	planform='elliptic': the chord varies as chord*sin(theta), with
	y=-span/2*cos(theta), and the sections are aligned at the quarter chord.
	Spanwise stations are equally spaced in theta, the tip stations being
	half a step away from theta=0,pi so that the tip chords are not zero.
	'''

	if len(naca)!=4:
		raise ValueError('naca must be a 4 digit string!')
	Mcamb,Pcamb,Tthick=int(naca[0]),int(naca[1]),int(naca[2:])

	Coord=naca4_section(Mcamb,Pcamb,Tthick,Nchord)
	Nc=Coord.shape[0]
	Ns=Nspan+1

	if planform=='rectangular':
		yv=np.linspace(-0.5*span,0.5*span,Ns)
		cv=chord*np.ones((Ns,))
	elif planform=='elliptic':
		dth=np.pi/Ns
		thv=np.linspace(0.5*dth,np.pi-0.5*dth,Ns)
		yv=-0.5*span*np.cos(thv)
		cv=chord*np.sin(thv)
	else:
		raise ValueError('Unknown planform %s!'%planform)
	xv=0.25*(chord-cv)

	nodes=np.zeros((Nc*Ns,3))
	for jj in range(Ns):
		nodes[jj*Nc:(jj+1)*Nc,0]=xv[jj]+cv[jj]*Coord[:,0]
		nodes[jj*Nc:(jj+1)*Nc,1]=yv[jj]
		nodes[jj*Nc:(jj+1)*Nc,2]=cv[jj]*Coord[:,1]

	# pitch about y axis
	nodes=rotate_nodes(nodes,alpha)
	nodes+=np.asarray(origin,dtype=float)

	return LiftingSurface(nodes,Nc,Ns)


def planform_area(lifting_surface):
	'''
	Area of the projection of lifting_surface over the plane normal to z,
	computed from the leading and trailing edge of each spanwise section.
	'''

	ls=lifting_surface
	Nc=ls.n_chordwise_nodes()
	Ns=ls.n_spanwise_nodes()
	yv=ls.nodes[::Nc,1]
	cv=np.array([np.max(ls.nodes[jj*Nc:(jj+1)*Nc,0])-
				 np.min(ls.nodes[jj*Nc:(jj+1)*Nc,0]) for jj in range(Ns)])

	return np.sum(0.5*(cv[1:]+cv[:-1])*np.diff(yv))


def rotate_nodes(nodes0,dalpha,axis=1):
	'''
	Rotate nodes of an angle dalpha about the axis through the origin. For
	axis=1 (y) a positive dalpha moves the trailing edge (x>0) downward.
	'''

	sn,cs=np.sin(dalpha),np.cos(dalpha)
	if axis==0:
		Rot=np.array([[1.,0.,0.],[0.,cs,-sn],[0.,sn,cs]])
	elif axis==1:
		Rot=np.array([[cs,0.,sn],[0.,1.,0.],[-sn,0.,cs]])
	else:
		Rot=np.array([[cs,-sn,0.],[sn,cs,0.],[0.,0.,1.]])

	return np.dot(nodes0,Rot.T)

'''
Tools to visualise results
'''


import numpy as np
import matplotlib as mpl
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d.art3d import Poly3DCollection


def _panel_polygons(surface):
    return [surface.nodes[pp,:] for pp in surface.panel_nodes]


def _set_equal_axes(ax,Nodes):
    ''' Equal scaling of 3D axes, over the bounding box of Nodes '''

    xmin,xmax=Nodes.min(0),Nodes.max(0)
    cc=0.5*(xmin+xmax)
    rr=0.5*np.max(xmax-xmin)
    ax.set_xlim(cc[0]-rr,cc[0]+rr)
    ax.set_ylim(cc[1]-rr,cc[1]+rr)
    ax.set_zlim(cc[2]-rr,cc[2]+rr)


def visualise_grid(S,figname='Geometry and grid',wake=True):
    '''
    Visualise surfaces, collocation points and wakes.
    The input S is a class upm3d_sta.Solver
    '''

    fig=plt.figure(figname, figsize=[10.,6.0])
    ax=fig.add_subplot(111,projection='3d')

    Nodes=[]
    for d in S.non_wake_surfaces:
        sf=d.surface
        ax.add_collection3d(Poly3DCollection(_panel_polygons(sf),
                           facecolor='0.8',edgecolor='k',lw=.5,alpha=0.5))
        ax.plot(sf.Cmat[:,0],sf.Cmat[:,1],sf.Cmat[:,2],'r',marker='o',
                                                ms=1.5,linestyle='')
        Nodes.append(sf.nodes)

    if wake:
        for body,d,off in S._lifting_surfaces():
            if d.wake.n_panels()>0:
                ax.add_collection3d(Poly3DCollection(_panel_polygons(d.wake),
                              facecolor='b',edgecolor='b',lw=.3,alpha=0.2))
                Nodes.append(d.wake.nodes)

    if len(Nodes)>0:
        _set_equal_axes(ax,np.concatenate(Nodes,axis=0))

    return ax, fig


def panel_field(S,field='pressure',figname=None,cmap='viridis'):
    '''
    Plot a panel field over all non-wake surfaces. field can be 'pressure',
    'doublet' or 'source'.
    '''

    values={'pressure':S.pressure_coefficients,
            'doublet':S.doublet_coefficients,
            'source':S.source_coefficients}[field]
    if figname is None:
        figname='Distribution of %s'%field

    norm=mpl.colors.Normalize(vmin=values.min(),vmax=values.max())
    cmap=plt.get_cmap(cmap)

    fig=plt.figure(figname, figsize=[10.,6.0])
    ax=fig.add_subplot(111,projection='3d')

    Nodes=[]
    for d in S.non_wake_surfaces:
        sf=d.surface
        off=S.surface_offset[sf.id]
        colors=cmap(norm(values[off:off+sf.n_panels()]))
        ax.add_collection3d(Poly3DCollection(_panel_polygons(sf),
                                 facecolors=colors,edgecolor='k',lw=.2))
        Nodes.append(sf.nodes)

    if len(Nodes)>0:
        _set_equal_axes(ax,np.concatenate(Nodes,axis=0))
    fig.colorbar(mpl.cm.ScalarMappable(norm=norm,cmap=cmap),ax=ax,
                                                              label=field)

    return ax, fig


def chordwise_cp(S,lifting_surface,station,figname='Chordwise Cp'):
    '''
    Pressure coefficient along the chord of the station-th spanwise strip
    of lifting_surface. The Cp axis is inverted, as usual.
    '''

    off=S.surface_offset[lifting_surface.id]
    Nc=lifting_surface.n_chordwise_panels()
    pp=np.arange(station*Nc,(station+1)*Nc)

    fig=plt.figure(figname, figsize=[10.,6.0])
    ax=fig.add_subplot(111)
    ax.plot(lifting_surface.Cmat[pp,0],S.pressure_coefficients[off+pp],
                                                          'k',marker='o')
    ax.invert_yaxis()
    ax.set_xlabel(r'x')
    ax.set_ylabel(r'$C_p$')

    return ax, fig


def force_history(S,body_index=0,figname='Force time-history'):
    '''
    Force and moment time histories from a upm3d_dyn.Solver time-marching
    solution.
    '''

    fig=plt.figure(figname, figsize=[10.,6.0])

    ax=fig.add_subplot(121)
    ax.set_title(r'Force')
    for cc,lab in zip(range(3),['x','y','z']):
        ax.plot(S.time,S.THforce[:,body_index,cc],label=lab)
    ax.set_xlabel(r'time [s]')
    ax.legend()

    ax2=fig.add_subplot(122)
    ax2.set_title(r'Moment')
    for cc,lab in zip(range(3),['x','y','z']):
        ax2.plot(S.time,S.THmoment[:,body_index,cc],label=lab)
    ax2.set_xlabel(r'time [s]')
    ax2.legend()

    return ax, fig
